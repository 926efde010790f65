"""End-to-end tests wiring the app the way app.py does."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from app import build_service, build_store
from config import Config
from tinylink.database import InMemoryLinkStore
from web_app import create_app


@pytest.fixture
def integration_config():
    return Config(
        store_backend="memory",
        base_url="https://sho.rt",
        path_prefix="/l",
        short_code_length=8,
    )


@pytest.fixture
async def integration_client(integration_config):
    logger = logging.getLogger("tinylink.test")
    store = build_store(integration_config, logger)
    service = build_service(integration_config, store, logger)
    app = create_app(
        store_instance=store,
        service_instance=service,
        config=integration_config,
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    await service.close()


def test_build_store_memory(integration_config):
    store = build_store(integration_config, logging.getLogger("tinylink.test"))
    assert isinstance(store, InMemoryLinkStore)


def test_build_service_uses_config(integration_config):
    logger = logging.getLogger("tinylink.test")
    service = build_service(integration_config, build_store(integration_config, logger), logger)

    assert service.generator.default_length == 8
    assert service.max_generation_attempts == integration_config.max_generation_attempts


@pytest.mark.asyncio
async def test_link_lifecycle(integration_client):
    """Create, read, visit, edit, delete and reuse a code."""
    client = integration_client

    created = await client.post(
        "/api/links",
        json={"title": "Docs", "url": "https://docs.example.com/start", "customCode": "docs"},
    )
    assert created.status_code == 201
    link = created.json()["data"]
    assert link["shortUrl"].endswith("/l/docs")

    for _ in range(3):
        visit = await client.get("/docs", follow_redirects=False)
        assert visit.status_code == 302
        assert visit.headers["location"] == "https://docs.example.com/start"

    stats = (await client.get("/api/links/docs")).json()["data"]
    assert stats["clickCount"] == 3

    edited = await client.patch(
        f"/api/links/{link['id']}",
        json={"url": "https://docs.example.com/v2"},
    )
    assert edited.status_code == 200
    assert edited.json()["data"]["clickCount"] == 3

    visit = await client.get("/docs", follow_redirects=False)
    assert visit.headers["location"] == "https://docs.example.com/v2"

    deleted = await client.delete(f"/api/links/{link['id']}")
    assert deleted.status_code == 200
    assert (await client.get("/docs", follow_redirects=False)).status_code == 404

    recreated = await client.post(
        "/api/links",
        json={"title": "Docs again", "url": "https://docs.example.com/new", "customCode": "docs"},
    )
    assert recreated.status_code == 201
    assert recreated.json()["data"]["id"] != link["id"]
    assert recreated.json()["data"]["clickCount"] == 0


@pytest.mark.asyncio
async def test_generated_codes_use_configured_length(integration_client):
    response = await integration_client.post(
        "/api/links",
        json={"title": "Generated", "url": "https://example.com"},
    )

    assert response.status_code == 201
    assert len(response.json()["data"]["customCode"]) == 8


@pytest.mark.asyncio
async def test_statistics_across_links(integration_client):
    client = integration_client
    for code in ("one", "two", "three"):
        await client.post(
            "/api/links",
            json={"title": code, "url": f"https://example.com/{code}", "customCode": code},
        )
    await client.get("/one", follow_redirects=False)
    await client.get("/two", follow_redirects=False)
    await client.get("/two", follow_redirects=False)

    stats = (await client.get("/api/stats")).json()

    assert stats == {
        "status": "success",
        "data": {
            "totalLinks": 3,
            "totalClicks": 3,
            "backend": "memory",
            "customCodesEnabled": True,
        },
    }
