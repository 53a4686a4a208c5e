# userstore/data/database.py

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from userstore.config import ConnectionInfo, get_config


Base = declarative_base()


def create_db_engine(info: ConnectionInfo) -> Engine:
    return create_engine(
        info.database_url,
        connect_args=info.connect_args,
    )


def get_store():
    # Deferred: the store module depends on Base through the models.
    from userstore.repository.user_store import UserStore

    store = UserStore.connect(get_config())
    try:
        yield store
    finally:
        store.close()
