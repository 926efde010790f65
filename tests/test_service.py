"""Tests for service layer."""

import asyncio

import pytest

from tinylink.database.memory import InMemoryLinkStore
from tinylink.database.models import NewLink
from tinylink.errors import DuplicateCode, GenerationExhausted, NotFound, ValidationError
from tinylink.service import LinkService
from tinylink.shortcode import ShortCodeGenerator


class FixedSequenceGenerator(ShortCodeGenerator):
    """Generator that replays a fixed list of codes."""

    def __init__(self, codes):
        super().__init__(default_length=4)
        self.codes = list(codes)
        self.calls = 0

    def generate(self, length=None):
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


async def store_create(store, code):
    return await store.create(NewLink(code, "Existing", "https://existing.example"))


@pytest.mark.asyncio
class TestLinkService:
    """Test link service."""

    async def test_create_link(self, service, sample_links):
        """Test creating a link with a generated code."""
        title, url = sample_links[0]
        link = await service.create_link(title, url)

        assert link.title == title
        assert link.url == url
        assert len(link.custom_code) == 6
        assert link.click_count == 0
        assert link.description is None

    async def test_round_trip_custom_code(self, service):
        """Create with a custom code, then read it back."""
        await service.create_link("Ex", "https://example.com", custom_code="ex1")

        link = await service.get_link_by_code("ex1")
        assert link.click_count == 0
        assert link.custom_code == "ex1"
        assert link.url == "https://example.com"

    async def test_input_is_trimmed(self, service):
        link = await service.create_link(
            "  Title  ", " https://example.com ", description="  ", custom_code="trim1"
        )

        assert link.title == "Title"
        assert link.url == "https://example.com"
        assert link.description is None
        assert link.custom_code == "trim1"

    @pytest.mark.parametrize("code", ["   ", " ex1 ", "ex1\t"])
    async def test_custom_code_used_verbatim(self, service, code):
        """Whitespace in a supplied code is rejected, never trimmed or replaced."""
        with pytest.raises(ValidationError, match="Invalid short code"):
            await service.create_link("Ex", "https://example.com", custom_code=code)

        assert await service.list_links() == []

    async def test_empty_custom_code_means_generated(self, service):
        link = await service.create_link("Ex", "https://example.com", custom_code="")
        assert len(link.custom_code) == 6

    async def test_create_duplicate_custom_code(self, service, sample_links):
        """Test duplicate custom code rejection, without retry or fallback."""
        await service.create_link("First", sample_links[0][1], custom_code="duplicate")

        with pytest.raises(DuplicateCode, match="already exists"):
            await service.create_link("Second", sample_links[1][1], custom_code="duplicate")

        links = await service.list_links()
        assert len(links) == 1
        assert links[0].title == "First"

    @pytest.mark.parametrize(
        "title,url,code",
        [
            ("", "https://example.com", None),
            ("   ", "https://example.com", None),
            ("Ex", "", None),
            ("Ex", "not-a-url", None),
            ("Ex", "ftp://example.com", None),
            ("Ex", "/relative/path", None),
            ("Ex", "http://example.com:abc/x", None),
            ("Ex", "https://example.com", "a b"),
            ("Ex", "https://example.com", "ab"),
            ("Ex", "https://example.com", "api"),
        ],
    )
    async def test_validation_errors(self, service, title, url, code):
        with pytest.raises(ValidationError):
            await service.create_link(title, url, custom_code=code)

        assert await service.list_links() == []

    async def test_custom_codes_disabled(self, store, short_code_generator, logger):
        service = LinkService(
            store=store,
            short_code_generator=short_code_generator,
            logger=logger,
            enable_custom_codes=False,
        )

        with pytest.raises(ValidationError, match="not enabled"):
            await service.create_link("Ex", "https://example.com", custom_code="mine")

    async def test_generation_retries_on_collision(self, store, logger):
        await store_create(store, "taken")
        generator = FixedSequenceGenerator(["taken", "taken", "free"])
        service = LinkService(store=store, short_code_generator=generator, logger=logger)

        link = await service.create_link("Ex", "https://example.com")

        assert link.custom_code == "free"
        assert generator.calls == 3

    async def test_generation_skips_reserved_codes(self, store, logger):
        generator = FixedSequenceGenerator(["stats", "fine"])
        service = LinkService(store=store, short_code_generator=generator, logger=logger)

        link = await service.create_link("Ex", "https://example.com")
        assert link.custom_code == "fine"

    async def test_generation_exhausted(self, store, logger):
        """A saturated code space fails instead of looping forever."""
        generator = ShortCodeGenerator(default_length=1, alphabet="z")
        service = LinkService(
            store=store,
            short_code_generator=generator,
            logger=logger,
            max_generation_attempts=5,
        )

        first = await service.create_link("First", "https://example.com/1")
        assert first.custom_code == "z"

        with pytest.raises(GenerationExhausted) as exc_info:
            await service.create_link("Second", "https://example.com/2")

        assert exc_info.value.attempts == 5
        assert len(await service.list_links()) == 1

    async def test_generated_code_does_not_shadow_custom_code(self, store, logger):
        generator = FixedSequenceGenerator(["mine", "other"])
        service = LinkService(store=store, short_code_generator=generator, logger=logger)

        await service.create_link("Custom", "https://example.com/1", custom_code="mine")
        link = await service.create_link("Generated", "https://example.com/2")

        assert link.custom_code == "other"

    async def test_invalid_attempt_budget(self, store):
        with pytest.raises(ValueError):
            LinkService(store=store, max_generation_attempts=0)

    async def test_list_links_newest_first(self, service):
        """Links A, B, C come back as C, B, A."""
        a = await service.create_link("A", "https://example.com/a")
        b = await service.create_link("B", "https://example.com/b")
        c = await service.create_link("C", "https://example.com/c")

        assert [l.id for l in await service.list_links()] == [c.id, b.id, a.id]

    async def test_get_link_does_not_count(self, service):
        await service.create_link("Ex", "https://example.com", custom_code="ex1")

        await service.get_link_by_code("ex1")
        await service.get_link_by_code("ex1")

        assert (await service.get_link_by_code("ex1")).click_count == 0

    async def test_get_missing(self, service):
        with pytest.raises(NotFound):
            await service.get_link_by_code("nonexistent")
        with pytest.raises(NotFound):
            await service.get_link_by_id(12345)

    async def test_resolve_counts_click(self, service):
        link = await service.create_link("Ex", "https://example.com", custom_code="ex1")

        assert await service.resolve("ex1") == "https://example.com"
        assert (await service.get_link_by_id(link.id)).click_count == 1

    async def test_resolve_nonexistent(self, service):
        """Test resolving an unknown code."""
        await service.create_link("Ex", "https://example.com", custom_code="ex1")

        with pytest.raises(NotFound):
            await service.resolve("nonexistent")

        assert (await service.get_link_by_code("ex1")).click_count == 0

    async def test_update_link(self, service):
        link = await service.create_link("Ex", "https://example.com", custom_code="ex1")
        await service.resolve("ex1")

        updated = await service.update_link(link.id, title="New", url="https://new.example")

        assert updated.title == "New"
        assert updated.url == "https://new.example"
        assert updated.custom_code == "ex1"
        assert updated.click_count == 1
        assert updated.updated_at >= link.updated_at
        assert await service.resolve("ex1") == "https://new.example"

    async def test_update_description_set_and_clear(self, service):
        link = await service.create_link("Ex", "https://example.com")

        updated = await service.update_link(link.id, description="About")
        assert updated.description == "About"

        cleared = await service.update_link(link.id, description="")
        assert cleared.description is None

    async def test_update_validation(self, service):
        link = await service.create_link("Ex", "https://example.com")

        with pytest.raises(ValidationError):
            await service.update_link(link.id, title="  ")
        with pytest.raises(ValidationError):
            await service.update_link(link.id, url="nope")
        with pytest.raises(ValidationError, match="Nothing to update"):
            await service.update_link(link.id)

        assert (await service.get_link_by_id(link.id)).title == "Ex"

    async def test_update_missing(self, service):
        with pytest.raises(NotFound):
            await service.update_link(999, title="x")

    async def test_delete_then_reuse_code(self, service):
        """Deleting frees the code; the old id is gone for good."""
        old = await service.create_link("Old", "https://old.example", custom_code="reuse")
        await service.delete_link(old.id)

        new = await service.create_link("New", "https://new.example", custom_code="reuse")

        assert new.id != old.id
        assert (await service.get_link_by_code("reuse")).id == new.id
        assert all(l.id != old.id for l in await service.list_links())
        with pytest.raises(NotFound):
            await service.get_link_by_id(old.id)

    async def test_delete_missing(self, service):
        with pytest.raises(NotFound):
            await service.delete_link(999)

    async def test_statistics(self, service):
        await service.create_link("Ex", "https://example.com", custom_code="ex1")
        await service.resolve("ex1")

        stats = await service.get_statistics()

        assert stats["total_links"] == 1
        assert stats["total_clicks"] == 1
        assert stats["backend"] == "memory"
        assert stats["custom_codes_enabled"] is True

    async def test_health_check(self, service):
        """Test health check."""
        health = await service.health_check()

        assert health == {"store": True, "overall": True}

    async def test_close_closes_store(self, service, store):
        await service.close()
        assert not await store.health_check()


@pytest.mark.asyncio
class TestLinkServiceConcurrency:
    """Creation properties under concurrent callers."""

    async def test_concurrent_distinct_custom_codes(self, service):
        codes = [f"link{i}" for i in range(50)]

        links = await asyncio.gather(
            *(service.create_link(f"T{i}", f"https://example.com/{i}", custom_code=c)
              for i, c in enumerate(codes))
        )

        assert sorted(l.custom_code for l in links) == sorted(codes)

    async def test_concurrent_same_custom_code(self, service):
        results = await asyncio.gather(
            service.create_link("One", "https://example.com/1", custom_code="race"),
            service.create_link("Two", "https://example.com/2", custom_code="race"),
            return_exceptions=True,
        )

        assert sum(1 for r in results if isinstance(r, DuplicateCode)) == 1
        assert sum(1 for r in results if not isinstance(r, Exception)) == 1

    async def test_concurrent_generated_codes_unique(self, logger):
        # Small code space forces collisions between concurrent creators
        store = InMemoryLinkStore(logger=logger)
        service = LinkService(
            store=store,
            short_code_generator=ShortCodeGenerator(default_length=2, alphabet="abcdef"),
            logger=logger,
            max_generation_attempts=50,
        )

        results = await asyncio.gather(
            *(service.create_link(f"T{i}", f"https://example.com/{i}") for i in range(20)),
            return_exceptions=True,
        )

        links = [r for r in results if not isinstance(r, Exception)]
        assert all(isinstance(r, GenerationExhausted) for r in results if isinstance(r, Exception))
        codes = [l.custom_code for l in links]
        assert len(codes) == len(set(codes))
        assert len(await service.list_links()) == len(links)
