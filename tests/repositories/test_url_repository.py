"""Tests for the URL repository."""

import pytest

from app.repositories.url_repository import URLRepository, DuplicateEntityError
from app.models.url import ShortURLCreate
from tests.utils import create_test_url, random_url


@pytest.mark.repository
class TestURLRepository:
    """Test suite for URL repository."""

    @pytest.fixture
    def url_repository(self):
        """Return URL repository instance."""
        return URLRepository()

    @pytest.mark.asyncio
    async def test_create_short_url(self, test_db, url_repository):
        """Test URL creation."""
        test_url = random_url()

        url = await url_repository.create_short_url(
            db=test_db,
            data=ShortURLCreate(original_url=test_url, short_code="create01")
        )

        assert url.id is not None
        assert url.original_url == test_url
        assert url.short_code == "create01"
        assert url.created_at is not None

        db_url = await url_repository.get_by_short_code(test_db, "create01")
        assert db_url is not None
        assert db_url.original_url == test_url

    @pytest.mark.asyncio
    async def test_create_from_dict(self, test_db, url_repository):
        url = await url_repository.create_short_url(
            test_db, {"original_url": "https://example.com/dict", "short_code": "dictcode"}
        )
        assert url.short_code == "dictcode"

    @pytest.mark.asyncio
    async def test_create_duplicate_short_code(self, test_db, url_repository):
        """The unique constraint surfaces as DuplicateEntityError."""
        await create_test_url(test_db, short_code="dupecode")

        with pytest.raises(DuplicateEntityError) as excinfo:
            await url_repository.create_short_url(
                db=test_db,
                data=ShortURLCreate(original_url=random_url(), short_code="dupecode")
            )

        assert excinfo.value.field_name == "short_code"
        assert excinfo.value.value == "dupecode"

    @pytest.mark.asyncio
    async def test_get_by_short_code_nonexistent(self, test_db, url_repository):
        assert await url_repository.get_by_short_code(test_db, "nonexistent") is None

    @pytest.mark.asyncio
    async def test_get_by_original_url(self, test_db, url_repository):
        target = await create_test_url(test_db, original_url="https://example.com/target")
        await create_test_url(test_db)

        found = await url_repository.get_by_original_url(test_db, "https://example.com/target")

        assert found is not None
        assert found.id == target.id
        assert await url_repository.get_by_original_url(test_db, "https://example.com/missing") is None

    @pytest.mark.asyncio
    async def test_check_short_code_exists(self, test_db, url_repository):
        await create_test_url(test_db, short_code="existing")

        assert await url_repository.check_short_code_exists(test_db, "existing") is True
        assert await url_repository.check_short_code_exists(test_db, "nonexist") is False

    @pytest.mark.asyncio
    async def test_list_all_in_insertion_order(self, test_db, url_repository):
        codes = ["first001", "second02", "third003"]
        for code in codes:
            await create_test_url(test_db, short_code=code)

        urls = await url_repository.list_all(test_db)

        assert [url.short_code for url in urls] == codes
        assert await url_repository.count(test_db) == 3

    @pytest.mark.asyncio
    async def test_list_all_empty(self, test_db, url_repository):
        assert await url_repository.list_all(test_db) == []
