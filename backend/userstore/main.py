import logging
import sys

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from userstore.config import get_config, get_log_level
from userstore.errors import DatabaseConnectionError
from userstore.repository.user_store import UserStore
from userstore.routes.user import router as user_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="User Store API",
    description="CRUD access to the users table",
    version="0.1.0"
)


@app.exception_handler(DatabaseConnectionError)
def database_unavailable(request: Request, exc: DatabaseConnectionError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# Routes
app.include_router(user_router, prefix="/users", tags=["Users"])

@app.get("/", tags=["Root"])
def read_root():
    return {"message": "User store API is online"}


def run():
    """Connects with the configured options, ensuring the table exists."""
    with UserStore.connect(get_config()):
        pass


def main() -> int:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run()
    except DatabaseConnectionError as e:
        print(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
