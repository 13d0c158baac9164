"""
Shared test fixtures and utilities.
"""

import os
import tempfile
from unittest.mock import AsyncMock, Mock, patch

import pytest

from adapters.db import Database, SQLiteCollectionStore
from adapters.llm.base import BaseRecipeGenerator
from adapters.llm.gemini_adapter import GeminiAdapter
from agent import ChefSession
from tests.base_test import make_recipe, sequential_ids


@pytest.fixture
def temp_database():
    """Create a temporary database for testing."""
    temp_db = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    temp_db.close()

    db = Database(temp_db.name)
    yield db

    db.close()
    os.unlink(temp_db.name)


@pytest.fixture
def collection_store(temp_database):
    """Create collection store with temp database."""
    return SQLiteCollectionStore(temp_database)


@pytest.fixture
def sample_recipe():
    """Standard generated recipe."""
    return make_recipe()


@pytest.fixture
def mock_generator(sample_recipe):
    """Mock generator answering with the sample recipe and a tiny image."""
    generator = Mock(spec=BaseRecipeGenerator)
    generator.request_recipe = AsyncMock(return_value=sample_recipe)
    generator.request_image = AsyncMock(
        return_value="data:image/png;base64,aW1hZ2U="
    )
    return generator


@pytest.fixture
def session(mock_generator, collection_store):
    """Session wired to the mock generator and a temp store."""
    return ChefSession(
        generator=mock_generator,
        store=collection_store,
        id_factory=sequential_ids(),
        clock=lambda: 1700000000000,
    )


@pytest.fixture
def mock_gemini_adapter():
    """Gemini adapter with a mocked SDK client."""
    adapter = GeminiAdapter(api_key="test-key")
    adapter._client = Mock()
    adapter._client.aio.models.generate_content = AsyncMock()
    return adapter


@pytest.fixture
def client(session, temp_database):
    """Test client for API testing, running the lifespan on test doubles."""
    from fastapi.testclient import TestClient

    from main import app

    with patch("main.Database", return_value=temp_database), patch(
        "main.create_session", return_value=session
    ):
        with TestClient(app) as test_client:
            yield test_client
