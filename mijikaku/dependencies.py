"""
FastAPI dependencies for dependency injection.

Everything a handler needs is reached through the request's app
(``app.state``), which the app factory fills in. Nothing here is a
module-level singleton, so several apps (e.g. one per test) can live
side by side.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from mijikaku.config import Settings
from mijikaku.database.connection import get_db
from mijikaku.services.link_service import LinkService
from mijikaku.services.short_code import ShortCodeGenerator


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_short_code_generator(request: Request) -> ShortCodeGenerator:
    return request.app.state.short_code_generator


def get_link_service(
    db: Session = Depends(get_db),
    generator: ShortCodeGenerator = Depends(get_short_code_generator),
    settings: Settings = Depends(get_settings)
) -> LinkService:
    """
    Get LinkService with all dependencies injected.

    Controllers depend on the service; the service depends on the
    database session, the id generator and the settings.
    """
    return LinkService(db=db, generator=generator, settings=settings)
