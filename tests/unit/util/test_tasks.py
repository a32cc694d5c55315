"""Unit tests for the background dispatcher."""

import pytest

from simskut.domain.repository import ProfileRepository
from simskut.util.tasks import BackgroundDispatcher, JobOutbox
from tests.conftest import make_profile
from tests.harness import create_app_container_fixture

app_container = create_app_container_fixture()


class TestBackgroundDispatcher:
    """Tests for fire-and-forget jobs."""

    @pytest.mark.asyncio
    async def test_job_runs_in_its_own_scope(self, app_container):
        """Jobs get a scoped container and see the shared tables."""
        # Arrange
        dispatcher = await app_container.get(BackgroundDispatcher)
        seen = []

        async def job(scoped):
            repo = await scoped.get(ProfileRepository)
            profile = await repo.create(make_profile("bella"))
            seen.append(profile.id)

        # Act
        dispatcher.dispatch("create_profile", job)
        await dispatcher.drain()

        # Assert
        async with app_container() as scoped:
            repo = await scoped.get(ProfileRepository)
            assert await repo.find_by_id(seen[0]) is not None
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_failing_job_is_contained(self, app_container):
        """A failing job neither raises nor blocks later jobs."""
        # Arrange
        dispatcher = await app_container.get(BackgroundDispatcher)
        ran = []

        async def broken(scoped):
            raise RuntimeError("boom")

        async def healthy(scoped):
            ran.append("healthy")

        # Act
        dispatcher.dispatch("broken", broken)
        dispatcher.dispatch("healthy", healthy)
        await dispatcher.drain()

        # Assert
        assert ran == ["healthy"]


class TestJobOutbox:
    """Tests for jobs held until the request scope closes."""

    @pytest.mark.asyncio
    async def test_released_when_scope_closes_cleanly(self, app_container):
        """Queued jobs reach the dispatcher only after the scope exits."""
        # Arrange
        dispatcher = await app_container.get(BackgroundDispatcher)
        ran = []

        async def job(scoped):
            ran.append("job")

        # Act
        async with app_container() as scoped:
            outbox = await scoped.get(JobOutbox)
            outbox.add("job", job)
            inside = (outbox.pending, dispatcher.pending)
        await dispatcher.drain()

        # Assert
        assert inside == (1, 0)
        assert ran == ["job"]

    @pytest.mark.asyncio
    async def test_discarded_when_scope_fails(self, app_container):
        """An exception leaving the scope drops every queued job."""
        # Arrange
        dispatcher = await app_container.get(BackgroundDispatcher)
        ran = []

        async def job(scoped):
            ran.append("job")

        # Act
        with pytest.raises(RuntimeError):
            async with app_container() as scoped:
                outbox = await scoped.get(JobOutbox)
                outbox.add("job", job)
                raise RuntimeError("write failed")
        await dispatcher.drain()

        # Assert
        assert ran == []
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_release_and_discard_empty_the_queue(self, app_container):
        """Each job leaves the outbox exactly once."""
        dispatcher = await app_container.get(BackgroundDispatcher)
        outbox = JobOutbox(dispatcher=dispatcher)

        async def job(scoped):
            pass

        outbox.add("first", job)
        outbox.add("second", job)
        assert outbox.discard() == 2
        outbox.add("third", job)
        assert outbox.release() == 1
        assert outbox.release() == 0
        await dispatcher.drain()
