"""Integration tests for TinyLink.

These run the app the way ``app.py`` builds it, lifespan included.
"""

import pytest
from httpx import ASGITransport, AsyncClient

import app as app_module
from app import build_app, lifespan
from config import Config
from tinylink.database.memory import InMemoryLinkStore


@pytest.fixture
def integration_config():
    return Config(database_url="memory://", log_level="DEBUG", _env_file=None)


@pytest.mark.asyncio
class TestIntegration:
    """End-to-end integration tests."""

    async def test_lifespan_wires_store_and_service(self, integration_config):
        app = build_app(integration_config)

        async with lifespan(app):
            assert isinstance(app.state.store, InMemoryLinkStore)
            assert app.state.service.store is app.state.store
            assert app.state.service.max_collision_retries == integration_config.max_collision_retries

    async def test_full_link_lifecycle(self, integration_config):
        """Create, inspect, follow, list and delete a link."""
        app = build_app(integration_config)

        async with lifespan(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as client:
                # 1. Create via API
                create_response = await client.post(
                    "/api/links",
                    json={"url": "example.com/test"}
                )
                assert create_response.status_code == 201
                code = create_response.json()["code"]

                # 2. Fresh record has no clicks
                info_response = await client.get(f"/api/links/{code}")
                assert info_response.status_code == 200
                assert info_response.json()["clicks"] == 0

                # 3. Follow the short link
                redirect_response = await client.get(f"/{code}", follow_redirects=False)
                assert redirect_response.status_code == 302
                assert redirect_response.headers["location"] == "https://example.com/test"

                # 4. Click counted
                info_response2 = await client.get(f"/api/links/{code}")
                assert info_response2.json()["clicks"] == 1

                # 5. Listed
                listed = await client.get("/api/links")
                assert [link["code"] for link in listed.json()] == [code]

                # 6. Deleted
                assert (await client.delete(f"/api/links/{code}")).status_code == 200
                assert (await client.get(f"/{code}", follow_redirects=False)).status_code == 404

    async def test_custom_code_workflow(self, integration_config):
        """Test workflow with custom code."""
        app = build_app(integration_config)

        async with lifespan(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as client:
                custom_code = "mylink12"
                response = await client.post(
                    "/api/links",
                    json={"url": "https://github.com/user/repo", "code": custom_code}
                )
                assert response.status_code == 201
                assert response.json()["code"] == custom_code

                redirect = await client.get(f"/{custom_code}", follow_redirects=False)
                assert redirect.status_code == 302

                duplicate = await client.post(
                    "/api/links",
                    json={"url": "https://different-url.com", "code": custom_code}
                )
                assert duplicate.status_code == 409


class TestServerStartup:
    """``main`` hands the right target to uvicorn."""

    def test_multiple_workers_use_import_string(self, monkeypatch):
        config = Config(database_url="memory://", workers=3, port=3100, _env_file=None)
        calls = []
        monkeypatch.setattr(app_module, "load_config", lambda: config)
        monkeypatch.setattr(app_module.uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))

        app_module.main()

        assert len(calls) == 1
        target, kwargs = calls[0]
        assert target == "app:build_app"
        assert kwargs["factory"] is True
        assert kwargs["workers"] == 3
        assert kwargs["port"] == 3100

    def test_single_worker_runs_in_process(self, monkeypatch):
        config = Config(database_url="memory://", workers=1, _env_file=None)
        servers = []

        class FakeServer:
            def __init__(self, uvicorn_config):
                self.config = uvicorn_config
                self.should_exit = False
                self.ran = False
                servers.append(self)

            def run(self):
                self.ran = True

        monkeypatch.setattr(app_module, "load_config", lambda: config)
        monkeypatch.setattr(app_module.uvicorn, "Server", FakeServer)
        monkeypatch.setattr(app_module.uvicorn, "run", lambda *a, **k: pytest.fail("uvicorn.run called"))
        monkeypatch.setattr(app_module.signal, "signal", lambda *a: None)

        app_module.main()

        assert len(servers) == 1
        assert servers[0].ran
        assert servers[0].config.port == config.port
