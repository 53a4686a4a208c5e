import logging
from contextlib import contextmanager
from enum import Enum
from typing import List, Optional, Union

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection, Engine, Row
from sqlalchemy.exc import SQLAlchemyError

from userstore.config import ConnectionInfo
from userstore.data.database import create_db_engine
from userstore.errors import DatabaseConnectionError, QueryError
from userstore.model.user import User

logger = logging.getLogger(__name__)

users = User.__table__


# ============================================================
# PROJECTIONS
# ------------------------------------------------------------
# The only column lists a caller may select. Statements are
# built from column objects, never from caller text.
# ============================================================

class Projection(str, Enum):
    ALL = "*"
    ID_NAME_EMAIL = "id, name, email"
    ID = "id"
    NAME = "name"
    EMAIL = "email"
    NAME_EMAIL = "name, email"

    def columns(self):
        if self is Projection.ALL:
            return list(users.columns)
        return [users.c[name.strip()] for name in self.value.split(",")]


# ============================================================
# USER STORE
# ============================================================

class UserStore:
    """
    CRUD access to the users table over a single connection.

    Each operation runs in its own transaction: it is committed on success,
    rolled back on failure, and the driver error is re-raised as QueryError
    with the original exception as its cause.
    """

    def __init__(self, engine: Engine, connection: Connection):
        self._engine = engine
        self._conn: Optional[Connection] = connection

    @classmethod
    def connect(cls, info: ConnectionInfo) -> "UserStore":
        """Opens the connection and creates the users table if absent."""
        try:
            target = info.database_url.render_as_string(hide_password=True)
            engine = create_db_engine(info)
        except SQLAlchemyError as exc:
            logger.warning("Invalid database URL: %s", exc)
            raise DatabaseConnectionError(str(exc)) from exc

        try:
            connection = engine.connect()
        except SQLAlchemyError as exc:
            engine.dispose()
            logger.warning("Could not connect to %s: %s", target, exc)
            raise DatabaseConnectionError(str(exc)) from exc

        try:
            users.create(connection, checkfirst=True)
            connection.commit()
        except SQLAlchemyError as exc:
            connection.close()
            engine.dispose()
            logger.warning("Could not create the users table on %s: %s", target, exc)
            raise DatabaseConnectionError(str(exc)) from exc

        logger.info("Connected to %s", target)
        return cls(engine, connection)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self):
        if self._conn is None:
            return
        try:
            self._conn.close()
        finally:
            self._conn = None
            self._engine.dispose()
            logger.info("User store closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @contextmanager
    def _transaction(self, action: str):
        if self._conn is None:
            raise DatabaseConnectionError("user store is closed")

        logger.debug("Running %s", action)
        try:
            yield self._conn
            self._conn.commit()
        except SQLAlchemyError as exc:
            logger.warning("%s failed: %s", action, exc)
            try:
                self._conn.rollback()
            except SQLAlchemyError:
                logger.warning("Rollback after %s failed", action, exc_info=True)
            raise QueryError(str(exc)) from exc
        except BaseException:
            self._conn.rollback()
            raise

    # ------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------

    def insert(self, name: str, email: str) -> None:
        with self._transaction("insert") as conn:
            conn.execute(insert(users).values(name=name, email=email))

    def select(self, projection: Union[Projection, str] = Projection.ALL) -> List[Row]:
        """
        Returns every row ordered by id, restricted to the given projection.
        Strings are accepted only when they equal a Projection value
        ("*", "id, name, email", ...); anything else raises ValueError.
        """
        projection = Projection(projection)
        statement = select(*projection.columns()).order_by(users.c.id)

        with self._transaction("select") as conn:
            return conn.execute(statement).all()

    def update(self, old_email: str, new_name: str, new_email: str) -> int:
        """Returns the number of rows changed; 0 when nothing matched."""
        statement = (
            update(users)
            .where(users.c.email == old_email)
            .values(name=new_name, email=new_email)
        )
        with self._transaction("update") as conn:
            return conn.execute(statement).rowcount

    def delete(self, email: str) -> int:
        with self._transaction("delete") as conn:
            return conn.execute(delete(users).where(users.c.email == email)).rowcount

    def reset(self) -> None:
        """Drops and recreates the users table. Meant for tests only."""
        with self._transaction("reset") as conn:
            users.drop(conn, checkfirst=True)
            users.create(conn)
