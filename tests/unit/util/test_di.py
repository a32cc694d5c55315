"""Unit tests for test container assembly."""

import pytest

from simskut.domain.service import ChangeFeed, ObjectStorage
from simskut.persistence.realtime import InMemoryChangeFeed
from tests.di import build_test_container


class TestBuildTestContainer:
    """Tests for selective unmocking."""

    def test_unknown_component_rejected(self):
        """Unmocking a component that does not exist fails fast."""
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"nope"})

    def test_realtime_requires_persistence(self):
        """The Postgres change feed cannot run against in-memory tables."""
        with pytest.raises(ValueError, match="requires"):
            build_test_container(unmock={"realtime"})

    @pytest.mark.asyncio
    async def test_all_mocks_by_default(self):
        """Without unmocking every adapter is the in-process version."""
        container = build_test_container()
        try:
            change_feed = await container.get(ChangeFeed)
            storage = await container.get(ObjectStorage)
        finally:
            await container.close()

        assert isinstance(change_feed, InMemoryChangeFeed)
        assert storage.public_url("a.jpg").startswith("https://storage.mock/")
