"""
Database engine, sessions and schema bootstrap.

The engine (and its connection pool) is NOT a module global: the app
factory creates it once in the lifespan, keeps it on ``app.state``
and disposes it at shutdown. Requests get a session through the
``get_db`` dependency.
"""

import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from mijikaku.config import Settings


logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """Create the process-wide engine for ``settings.database_url``"""
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        # Handlers run in a thread pool; sessions cross threads
        connect_args["check_same_thread"] = False

    return create_engine(
        settings.database_url,
        echo=settings.database_echo,
        connect_args=connect_args,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """
    Create the links table if it does not exist yet.

    Idempotent; safe to run on every startup. Errors propagate so the
    caller can abort startup.
    """
    # Import models to ensure they're registered with Base
    from mijikaku.models import Link  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ready ({engine.url.render_as_string(hide_password=True)})")


def get_db(request: Request) -> Iterator[Session]:
    """Yield one session per request from the app's session factory"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
