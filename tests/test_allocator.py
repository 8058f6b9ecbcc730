"""Tests for code allocation."""

import random
from datetime import datetime, timezone

import pytest
from shortlinks.allocator import CodeAllocator
from shortlinks.common.validators import is_valid_short_code
from shortlinks.errors import InvalidInput, Conflict, ExhaustedRetries
from shortlinks.shortcode import ShortCodeGenerator


class FixedGenerator(ShortCodeGenerator):
    """Generator that replays a fixed list of codes."""

    def __init__(self, codes):
        super().__init__()
        self.codes = list(codes)

    def generate_random(self, length=None):
        return self.codes.pop(0)


@pytest.mark.asyncio
class TestCodeAllocator:
    """Test custom and generated code allocation."""

    async def test_custom_code_is_used_literally(self, store, logger):
        """A valid unused custom code is stored and retrievable by that exact code."""
        allocator = CodeAllocator(store, logger=logger)

        link = await allocator.allocate("https://example.com", "abc123")

        assert link.code == "abc123"
        assert link.target_url == "https://example.com"
        assert link.total_clicks == 0
        assert link.last_clicked_at is None
        assert link.id >= 1
        assert link.created_at.tzinfo is not None

        stored = await store.get_link("abc123")
        assert stored == link

    async def test_custom_codes_are_case_sensitive(self, store, logger):
        """Codes differing only in case are distinct."""
        allocator = CodeAllocator(store, logger=logger)

        lower = await allocator.allocate("https://example.com/a", "abcdef")
        upper = await allocator.allocate("https://example.com/b", "ABCDEF")

        assert lower.id != upper.id
        assert (await store.get_link("ABCDEF")).target_url == "https://example.com/b"

    async def test_duplicate_custom_code_conflicts(self, store, logger):
        """A taken custom code fails with Conflict and writes nothing."""
        allocator = CodeAllocator(store, logger=logger)
        await allocator.allocate("https://example.com", "taken12")

        with pytest.raises(Conflict, match="already exists"):
            await allocator.allocate("https://other.example.com", "taken12")

        links = await store.list_links()
        assert len(links) == 1
        assert links[0].target_url == "https://example.com"

    @pytest.mark.parametrize("custom_code", [
        "abc",
        "abcde",
        "abcdefghi",
        "abc-123",
        "abc_123",
        "abc 123",
        "héllo12",
    ])
    async def test_invalid_custom_code(self, store, logger, custom_code):
        """Custom codes outside [A-Za-z0-9]{6,8} fail with InvalidInput."""
        allocator = CodeAllocator(store, logger=logger)

        with pytest.raises(InvalidInput):
            await allocator.allocate("https://example.com", custom_code)

        assert await store.list_links() == []

    @pytest.mark.parametrize("target_url", ["", "not a url", "example.com", "ftp://example.com"])
    async def test_invalid_target_url(self, store, logger, target_url):
        """Malformed URLs fail with InvalidInput before any code is checked."""
        allocator = CodeAllocator(store, logger=logger)

        with pytest.raises(InvalidInput):
            await allocator.allocate(target_url, "abc123")

        assert not await store.code_exists("abc123")

    async def test_empty_custom_code_generates(self, store, logger):
        """An empty custom code counts as not supplied."""
        allocator = CodeAllocator(
            store,
            generator=ShortCodeGenerator(rng=random.Random(5)),
            logger=logger,
        )

        link = await allocator.allocate("https://example.com", "")

        assert len(link.code) == 6
        assert is_valid_short_code(link.code)[0]

    async def test_generated_code_skips_collisions(self, store, logger):
        """Generated candidates that already exist are skipped."""
        await store.insert_link("aaaaaa", "https://one.example.com", datetime.now(timezone.utc))
        await store.insert_link("bbbbbb", "https://two.example.com", datetime.now(timezone.utc))
        allocator = CodeAllocator(
            store,
            generator=FixedGenerator(["aaaaaa", "bbbbbb", "cccccc"]),
            logger=logger,
        )

        link = await allocator.allocate("https://three.example.com")

        assert link.code == "cccccc"

    async def test_exhausted_retries(self, store, logger):
        """Ten colliding candidates fail with ExhaustedRetries."""
        await store.insert_link("zzzzzz", "https://example.com", datetime.now(timezone.utc))
        allocator = CodeAllocator(
            store,
            generator=FixedGenerator(["zzzzzz"] * 10 + ["free01"]),
            max_attempts=10,
            logger=logger,
        )

        with pytest.raises(ExhaustedRetries) as exc_info:
            await allocator.allocate("https://example.org")

        assert exc_info.value.status_code == 500
        assert len(await store.list_links()) == 1

    async def test_ids_increase(self, store, logger):
        """Store-assigned ids grow with each creation."""
        allocator = CodeAllocator(store, logger=logger)

        first = await allocator.allocate("https://example.com/1")
        second = await allocator.allocate("https://example.com/2")

        assert second.id > first.id
