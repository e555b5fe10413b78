import logging
from typing import Optional

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from mijikaku.config import Settings, settings as default_settings
from mijikaku.errors import NotFound, StorageError
from mijikaku.models.link import Link
from mijikaku.services.short_code import ShortCodeGenerator
from mijikaku.services.url_validator import validate_url


logger = logging.getLogger(__name__)

# Paths served by the app itself; a link id must never shadow them
RESERVED_IDS = frozenset({"health", "docs", "redoc"})


class LinkService:
    """
    Shorten and resolve links on top of one database session.

    The session, the id generator and the settings are injected, so
    tests can hand in a deterministic generator or a broken session.
    """

    def __init__(
        self,
        db: Session,
        generator: Optional[ShortCodeGenerator] = None,
        settings: Optional[Settings] = None
    ):
        self.db = db
        self.settings = settings or default_settings
        self.generator = generator or ShortCodeGenerator(
            length=self.settings.short_code_length,
            alphabet=self.settings.short_code_alphabet
        )

    def insert(self, link_id: str, url: str) -> Link:
        """
        Store a new link.

        Raises:
            StorageError: on any database failure, a taken id included
        """
        try:
            return self._insert_row(link_id, url)
        except IntegrityError as e:
            logger.error(f"Insert of link {link_id} failed: {e}")
            raise StorageError(str(e)) from e

    def _insert_row(self, link_id: str, url: str) -> Link:
        # Plain INSERT: a taken id must come back from the database as an
        # IntegrityError, never be merged with an object already in the session
        try:
            self.db.execute(insert(Link).values(id=link_id, url=url))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Insert of link {link_id} failed: {e}")
            raise StorageError(str(e)) from e
        return Link(id=link_id, url=url)

    def lookup(self, link_id: str) -> str:
        """
        Return the URL stored under ``link_id``.

        Raises:
            NotFound: no such id (StorageError instead when
                ``distinguish_not_found`` is off)
            StorageError: on any database failure
        """
        try:
            link = self.db.get(Link, link_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Lookup of link {link_id} failed: {e}")
            raise StorageError(str(e)) from e

        if link is None:
            if self.settings.distinguish_not_found:
                raise NotFound(link_id)
            raise StorageError("no rows returned by a query that expected to return at least one row")

        return link.url

    def shorten(self, raw_url: str) -> Link:
        """
        Validate ``raw_url``, pick a fresh id and store the link.

        A colliding id is replaced and the insert retried, up to
        ``max_retries`` attempts in total.

        Raises:
            InvalidURL: if ``raw_url`` is not an absolute URL
            StorageError: on database failure or when every attempt collided
        """
        url = validate_url(raw_url)

        attempts = max(1, self.settings.max_retries)
        last_error = None
        for attempt in range(attempts):
            link_id = self._new_id()
            try:
                link = self._insert_row(link_id, url)
            except IntegrityError as e:
                last_error = e
                logger.warning(f"Short code {link_id} already taken (attempt {attempt + 1}/{attempts})")
                continue

            logger.info(f"Shortened {url} as {link.id}")
            return link

        logger.error(f"Could not store link after {attempts} attempts: {last_error}")
        raise StorageError(str(last_error))

    def resolve(self, link_id: str) -> str:
        """Return the redirect target for ``link_id`` (no mutation)"""
        return self.lookup(link_id)

    def short_url(self, link: Link) -> str:
        """Fully qualified short URL for ``link``"""
        return f"{self.settings.base_url.rstrip('/')}/{link.id}"

    def _new_id(self) -> str:
        link_id = self.generator.generate()
        while link_id in RESERVED_IDS:
            link_id = self.generator.generate()
        return link_id
