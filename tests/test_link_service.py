"""
Tests for LinkService business logic, without HTTP in between.
"""

import pytest

from mijikaku.database.connection import Base
from mijikaku.errors import InvalidURL, NotFound, StorageError
from mijikaku.models.link import Link
from mijikaku.services.link_service import LinkService

from conftest import SequenceGenerator, make_settings


class TestShorten:

    def test_shorten_and_resolve(self, db_session, test_settings):
        service = LinkService(db_session, settings=test_settings)

        link = service.shorten("https://www.example.com/page")

        assert len(link.id) == 6
        assert service.resolve(link.id) == "https://www.example.com/page"
        assert db_session.get(Link, link.id).url == "https://www.example.com/page"

    def test_shorten_stores_normalized_url(self, db_session, test_settings):
        service = LinkService(db_session, settings=test_settings)

        link = service.shorten("https://WWW.Example.com")

        assert link.url == "https://www.example.com/"

    def test_invalid_url_writes_nothing(self, db_session, test_settings):
        service = LinkService(db_session, settings=test_settings)

        with pytest.raises(InvalidURL):
            service.shorten("not a url")

        assert db_session.query(Link).count() == 0

    def test_short_url(self, db_session, tmp_path):
        settings = make_settings(tmp_path, base_url="https://sho.rt/")
        service = LinkService(db_session, generator=SequenceGenerator(["abc123"]), settings=settings)

        link = service.shorten("https://example.com/")

        assert service.short_url(link) == "https://sho.rt/abc123"

    def test_generator_defaults_from_settings(self, db_session, tmp_path):
        settings = make_settings(tmp_path, short_code_length=10, short_code_alphabet="ab")
        service = LinkService(db_session, settings=settings)

        link = service.shorten("https://example.com/")

        assert len(link.id) == 10
        assert set(link.id) <= {"a", "b"}


class TestCollisions:

    def test_collision_is_retried(self, db_session, test_settings):
        generator = SequenceGenerator(["aaaaaa", "aaaaaa", "bbbbbb"])
        service = LinkService(db_session, generator=generator, settings=test_settings)

        first = service.shorten("https://example.com/one")
        second = service.shorten("https://example.com/two")

        assert first.id == "aaaaaa"
        assert second.id == "bbbbbb"
        assert service.resolve("aaaaaa") == "https://example.com/one"
        assert service.resolve("bbbbbb") == "https://example.com/two"

    def test_collision_without_retry_is_storage_error(self, db_session, tmp_path):
        settings = make_settings(tmp_path, max_retries=1)
        generator = SequenceGenerator(["aaaaaa", "aaaaaa"])
        service = LinkService(db_session, generator=generator, settings=settings)

        service.shorten("https://example.com/one")
        with pytest.raises(StorageError):
            service.shorten("https://example.com/two")

        # The original link is untouched
        assert service.resolve("aaaaaa") == "https://example.com/one"

    def test_retries_are_bounded(self, db_session, tmp_path):
        settings = make_settings(tmp_path, max_retries=3)
        generator = SequenceGenerator(["aaaaaa"] * 4)
        service = LinkService(db_session, generator=generator, settings=settings)

        service.shorten("https://example.com/one")
        with pytest.raises(StorageError):
            service.shorten("https://example.com/two")

        assert db_session.query(Link).count() == 1

    def test_reserved_ids_are_skipped(self, db_session, test_settings):
        generator = SequenceGenerator(["health", "cccccc"])
        service = LinkService(db_session, generator=generator, settings=test_settings)

        link = service.shorten("https://example.com/")

        assert link.id == "cccccc"


class TestLookup:

    def test_unknown_id_is_storage_error_by_default(self, db_session, test_settings):
        service = LinkService(db_session, settings=test_settings)

        with pytest.raises(StorageError) as exc_info:
            service.lookup("zzzzzz")

        assert exc_info.value.status_code == 500

    def test_unknown_id_is_not_found_when_enabled(self, db_session, tmp_path):
        settings = make_settings(tmp_path, distinguish_not_found=True)
        service = LinkService(db_session, settings=settings)

        with pytest.raises(NotFound) as exc_info:
            service.lookup("zzzzzz")

        assert exc_info.value.status_code == 404

    def test_database_failure_on_lookup(self, db_session, db_engine, test_settings):
        service = LinkService(db_session, settings=test_settings)
        Base.metadata.drop_all(bind=db_engine)

        with pytest.raises(StorageError):
            service.lookup("zzzzzz")

    def test_database_failure_on_insert(self, db_session, db_engine, test_settings):
        service = LinkService(db_session, settings=test_settings)
        Base.metadata.drop_all(bind=db_engine)

        with pytest.raises(StorageError) as exc_info:
            service.shorten("https://example.com/")

        assert exc_info.value.status_code == 500


class TestInsert:

    def test_insert_duplicate_id_is_storage_error(self, db_session, test_settings):
        service = LinkService(db_session, settings=test_settings)

        service.insert("dupdup", "https://example.com/one")
        with pytest.raises(StorageError):
            service.insert("dupdup", "https://example.com/two")

        assert service.lookup("dupdup") == "https://example.com/one"
