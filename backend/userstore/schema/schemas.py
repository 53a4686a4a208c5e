from pydantic import BaseModel, Field


# -------------------
# User Schemas
# -------------------
class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)


class UserUpdate(UserCreate):
    pass


class MutationResponse(BaseModel):
    status: str = "ok"
    rows_affected: int
