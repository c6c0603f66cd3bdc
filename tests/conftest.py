"""Pytest configuration and fixtures for the restaurant backend.

Unit tests run against the in-memory fakes in tests/fakes.py; Appwrite
HTTP behaviour is tested with httpx.MockTransport, so no backend is needed.
"""

import pytest

from restaurant_backend.application.services.restaurant_schema import build_restaurant_schema
from restaurant_backend.core.config import Settings, get_settings
from restaurant_backend.domain.schema import SchemaDefinition
from tests.fakes import InMemoryDocumentStore, InMemoryFileStore, InMemorySchemaStore

TEST_DATABASE_ID = "restaurant-db"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Drop cached settings so env changes in one test do not leak into another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Valid settings that ignore any local .env file."""
    return Settings(
        _env_file=None,
        appwrite_endpoint="https://appwrite.test/v1",
        appwrite_project_id="test-project",
        appwrite_api_key="test-key",
        attribute_poll_interval_seconds=0.01,
        attribute_wait_timeout_seconds=1.0,
    )


@pytest.fixture
def restaurant_schema() -> SchemaDefinition:
    return build_restaurant_schema(TEST_DATABASE_ID)


@pytest.fixture
def schema_store() -> InMemorySchemaStore:
    return InMemorySchemaStore()


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def file_store() -> InMemoryFileStore:
    return InMemoryFileStore()
