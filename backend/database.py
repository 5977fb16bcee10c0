"""Database engine, sessions and schema management."""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str) -> Engine:
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, echo=False)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine):
    # Registers every model on Base.metadata
    import orm  # noqa: F401

    Base.metadata.create_all(bind=engine)


def migrations_dir() -> Path:
    import db_migrations

    return Path(db_migrations.__file__).parent


def run_migrations(engine: Engine):
    """Run Alembic migrations, falling back to create_all if they fail.

    ``alembic.ini`` is only for the ``alembic`` CLI in a source checkout; the
    scripts are located through the installed ``db_migrations`` package.
    """
    try:
        alembic_cfg = Config()
        alembic_cfg.set_main_option("script_location", str(migrations_dir()))
        with engine.begin() as connection:
            alembic_cfg.attributes["connection"] = connection
            command.upgrade(alembic_cfg, "head")
    except Exception as e:
        logger.warning("Migration failed, creating schema directly: %s", e)
        init_db(engine)
