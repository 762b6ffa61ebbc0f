"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from catalog_hub.api_server import create_app
from catalog_hub.catalog.cache import HOUR
from catalog_hub.catalog.manager import CatalogDefinition, CatalogRegistry
from catalog_hub.config import Settings


@pytest.fixture
def fetcher(fake_fetcher, sample_entries):
    """Return a fetcher serving the sample catalog."""
    return fake_fetcher("primary", sample_entries)


@pytest.fixture
def client(fetcher, failing_fetcher, clock):
    """Return a TestClient over a registry with fake sources."""
    registry = CatalogRegistry(
        [
            CatalogDefinition("models", "Test models", HOUR, lambda: [fetcher]),
            CatalogDefinition("repositories", "Test repos", HOUR, lambda: [failing_fetcher("down")]),
        ],
        clock=clock,
    )
    with TestClient(create_app(registry=registry, settings=Settings())) as test_client:
        yield test_client


def _ids(response):
    return [e["id"] for e in response.json()["entries"]]


class TestApi:
    """Tests for the catalog routes."""

    def test_health(self, client):
        """Health reports ok."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["ok"] is True

    def test_list_catalogs(self, client):
        """Every registered catalog is listed."""
        data = client.get("/catalogs").json()

        assert [c["name"] for c in data["catalogs"]] == ["models", "repositories"]

    def test_default_sort_is_popularity(self, client):
        """Without sortBy entries come back most popular first."""
        response = client.get("/catalogs/models")

        assert response.status_code == 200
        assert _ids(response) == ["resnet", "gpt2", "bert", "vit"]
        assert response.json()["filters"]["sortBy"] == "popularity"

    def test_query(self, client):
        """Query parameters become a FilterSpec."""
        response = client.get(
            "/catalogs/models",
            params={"search": "transformer", "minPopularity": 200, "sortBy": "recency"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 2
        assert _ids(response) == ["gpt2", "bert"]
        assert data["entries"][0]["popularityMetric"] == 900
        assert data["entries"][0]["sourceName"] == "primary"
        assert data["filters"]["sortBy"] == "recency"
        assert data["fromFallback"] is False

    def test_tags_comma_separated(self, client):
        """Tags are split on commas and must all match."""
        response = client.get("/catalogs/models", params={"tags": "transformer,jax"})

        assert _ids(response) == ["vit"]

    def test_model_filters_and_likes_sort(self, client):
        """Framework, fine-tuned and likes map onto the spec."""
        response = client.get("/catalogs/models", params={"isFineTuned": "false", "sortBy": "likes"})
        assert _ids(response) == ["gpt2", "bert"]

        response = client.get("/catalogs/models", params={"framework": "PyTorch", "isFineTuned": "true"})
        assert _ids(response) == ["resnet"]

    def test_tabular_filter(self, client):
        """isTabular=true excludes entries without the flag."""
        response = client.get("/catalogs/models", params={"isTabular": "true"})

        assert response.status_code == 200
        assert response.json()["count"] == 0

    def test_refresh_param(self, client, fetcher):
        """refresh=true forces a new fetch."""
        client.get("/catalogs/models")
        client.get("/catalogs/models", params={"refresh": "true"})

        assert fetcher.calls == 2

    def test_fallback_flag(self, client):
        """A catalog whose sources are down serves its fallback set."""
        data = client.get("/catalogs/repositories").json()

        assert data["fromFallback"] is True
        assert data["count"] > 0

    def test_unknown_catalog(self, client):
        """Unknown catalogs are 404."""
        assert client.get("/catalogs/nope").status_code == 404
        assert client.get("/catalogs/nope/status").status_code == 404

    @pytest.mark.parametrize(
        "params",
        [{"sortBy": "stars"}, {"minPopularity": -1}, {"limit": 0}, {"isTabular": "maybe"}],
    )
    def test_invalid_params(self, client, params):
        """Invalid parameters are rejected."""
        assert client.get("/catalogs/models", params=params).status_code == 422

    def test_status(self, client):
        """Status reports cache metadata."""
        client.get("/catalogs/models")

        data = client.get("/catalogs/models/status").json()

        assert data["success"] is True
        assert data["count"] == 4
        assert data["fallbackVersion"] is None
        assert data["sources"][0]["id"] == "primary"
