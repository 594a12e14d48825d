"""
Catalog Configuration Unit Tests

Environment-driven config dataclasses.

Usage:
    pytest tests/unit/tdd -v
"""
import pytest

from core.config import CatalogCollectionsConfig, CatalogConfig, InfraConfig

pytestmark = [pytest.mark.unit]


class TestInfraConfig:

    def test_uri_from_host_and_port(self, monkeypatch):
        monkeypatch.delenv("MONGODB_URL", raising=False)
        monkeypatch.setenv("MONGODB_HOST", "db")
        monkeypatch.setenv("MONGODB_PORT", "27018")

        assert InfraConfig.from_env().mongodb_uri == "mongodb://db:27018"

    def test_explicit_url_wins(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URL", "mongodb://replica/?replicaSet=rs0")
        monkeypatch.setenv("MONGODB_HOST", "ignored")

        assert InfraConfig.from_env().mongodb_uri == "mongodb://replica/?replicaSet=rs0"

    def test_bad_port_falls_back_to_default(self, monkeypatch):
        monkeypatch.delenv("MONGODB_URL", raising=False)
        monkeypatch.setenv("MONGODB_HOST", "localhost")
        monkeypatch.setenv("MONGODB_PORT", "not-a-port")

        assert InfraConfig.from_env().mongodb_port == 27017

    def test_nats_servers(self):
        assert InfraConfig(nats_host="bus", nats_port=4223).nats_servers == "nats://bus:4223"


class TestCollectionsConfig:

    def test_prefix_applies_to_every_collection(self, monkeypatch):
        monkeypatch.setenv("CATALOG_COLLECTION_PREFIX", "it_")

        collections = CatalogCollectionsConfig.from_env()

        assert collections.photos == "it_photos"
        assert collections.counters == "it_counters"

    def test_defaults(self):
        collections = CatalogConfig().collections
        assert (collections.users, collections.albums, collections.comments) == ("users", "albums", "comments")
