"""Shared fixtures for end-to-end API tests."""

import pytest
from fastapi.testclient import TestClient

from inkwell.domain.repository import BlogPostRepository, CommentRepository
from inkwell.interface.api.app import create_app
from tests.di import build_test_container


@pytest.fixture
def container():
    """Test container with in-memory persistence, shared by every request."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client with test container."""
    with TestClient(create_app(container=container)) as test_client:
        yield test_client


@pytest.fixture
def seed(client, container):
    """Store domain objects straight into the in-memory repositories."""

    class Seeder:
        def post(self, post):
            return client.portal.call(self._save, BlogPostRepository, post)

        def comment(self, comment):
            return client.portal.call(self._save, CommentRepository, comment)

        async def _save(self, repository_type, entity):
            repository = await container.get(repository_type)
            return await repository.save(entity)

    return Seeder()
