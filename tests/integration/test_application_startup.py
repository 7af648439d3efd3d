"""Integration tests for application lifecycle and startup behavior."""

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


class TestApplicationStartup:
    """Test application startup against the configured storage."""

    @pytest.mark.asyncio
    async def test_startup_registers_dependencies(self):
        import src.catalog.api.http.app as application

        test_app = FastAPI()
        await application.startup(test_app)
        try:
            deps = test_app.state.app_dependencies
            assert deps.repository_backend == get_config().database.backend
            assert deps.database_service.health_check() is True
        finally:
            await application.shutdown(test_app)

    @pytest.mark.asyncio
    async def test_startup_honours_memory_backend(self):
        import src.catalog.api.http.app as application
        from src.catalog.runtime.context import with_context

        test_config = ConfigData()
        test_config.database.backend = "memory"
        test_config.database.url = "sqlite:///:memory:"

        test_app = FastAPI()
        with with_context(config_override=test_config):
            await application.startup(test_app)
        try:
            assert test_app.state.app_dependencies.repository_backend == "memory"
            assert test_app.state.app_dependencies.product_store == {}
        finally:
            await application.shutdown(test_app)

    @pytest.mark.asyncio
    async def test_shutdown_without_startup(self):
        import src.catalog.api.http.app as application

        await application.shutdown(FastAPI())


def test_full_stack_round_trip():
    """Requests go through the real lifespan wiring without overrides."""
    from src.catalog.api.http.app import app

    with TestClient(app) as client:
        created = client.post("/api/v1/products/", json={"name": "Widget", "price": "9.99"})
        assert created.status_code == 201

        product_id = created.json()["id"]
        fetched = client.get(f"/api/v1/products/{product_id}")
        assert fetched.status_code == 200
        assert Decimal(fetched.json()["price"]) == Decimal("9.99")

        assert client.get("/health/ready").json()["status"] == "ready"
