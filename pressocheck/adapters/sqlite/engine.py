"""Engine creation for the SQLite record store.

Tables are created on first use; the schema has a single version and no
migration support.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from .models import Base


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """Return a SQLAlchemy engine, creating the data directory as needed."""
    if database_url.startswith("sqlite:///"):
        db_location = database_url.replace("sqlite:///", "", 1)
        directory = os.path.dirname(db_location)
        if db_location != ":memory:" and directory:
            os.makedirs(directory, exist_ok=True)
    return create_engine(database_url, echo=echo, future=True)


def init_db(engine: Engine) -> None:
    """Create tables if they don't exist."""
    Base.metadata.create_all(engine)
