"""Test harness for unit, integration and E2E tests.

Integration tests assume docker-compose services are already running.
Settings are loaded from environment variables (configure via .env or export).
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from simskut.interface.api.app import create_app
from simskut.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Closes the container afterwards

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_invite(integration_env):
            repo = await integration_env.get(InviteRepository)
            invite = await repo.create(Invite(...))
            assert invite.id is not None
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_app_container_fixture(unmock: set[Component] | None = None):
    """Factory for fixtures yielding the APP-scoped container itself.

    Use this when a test needs several request scopes sharing one set of
    in-memory tables, e.g. a background job or a realtime buffer.
    """

    @pytest_asyncio.fixture
    async def _app_container():
        container = build_test_container(unmock=unmock or set())
        yield container
        await container.close()

    return _app_container


def create_client_fixture(unmock: set[Component] | None = None):
    """Factory for TestClient fixtures over an app wired to a test container.

    The container is exposed as `client.container` so tests can reach the
    mock adapters (auth directory, recorded push messages, change feed).
    """

    @pytest.fixture
    def _client():
        container = build_test_container(unmock=unmock or set(), with_fastapi=True)
        app = create_app(container=container)
        with TestClient(app) as client:
            client.container = container
            yield client

    return _client
