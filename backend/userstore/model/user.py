# userstore/model/user.py
from sqlalchemy import CheckConstraint, Column, Integer, Text
from userstore.data.database import Base

class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("name <> ''", name="users_name_not_empty"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False)
