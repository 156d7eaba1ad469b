"""Unit tests for InMemoryActivityRepository."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from freezegun import freeze_time

from domain.activity.model import Activity, ActivityType
from infrastructure.persistence.inmemory.activity_repository import (
    InMemoryActivityRepository,
)


@pytest.fixture
def activity_repo():
    """Create fresh activity repository for each test."""
    return InMemoryActivityRepository()


@pytest.mark.asyncio
class TestInMemoryActivityRepository:
    """Test InMemoryActivityRepository implementation."""

    async def test_save_assigns_id(self, activity_repo):
        saved = await activity_repo.save(Activity(user_id="user_123", type=ActivityType.RUNNING))

        assert saved.id is not None
        assert ObjectId.is_valid(saved.id)
        assert saved.user_id == "user_123"

    async def test_save_does_not_mutate_input(self, activity_repo):
        activity = Activity(user_id="user_123")

        await activity_repo.save(activity)

        assert activity.id is None
        assert activity.created_at is None

    async def test_find_by_id_returns_saved(self, activity_repo):
        saved = await activity_repo.save(
            Activity(
                user_id="user_123",
                type=ActivityType.CYCLING,
                duration=45,
                additional_metrics={"avgSpeed": 27.5},
            )
        )

        found = await activity_repo.find_by_id(saved.id)

        assert found == saved

    async def test_find_by_id_missing(self, activity_repo):
        assert await activity_repo.find_by_id("6650c0d2e4b0a1b2c3d4e5f6") is None

    async def test_save_with_id_replaces(self, activity_repo):
        with freeze_time("2025-01-15 07:30:00"):
            saved = await activity_repo.save(Activity(user_id="user_123", duration=30))

        with freeze_time("2025-01-15 08:00:00"):
            updated = await activity_repo.save(
                Activity(
                    id=saved.id,
                    user_id="user_123",
                    duration=45,
                    created_at=saved.created_at,
                )
            )

        assert await activity_repo.count() == 1
        assert updated.id == saved.id
        assert updated.duration == 45
        assert updated.created_at == datetime(2025, 1, 15, 7, 30, tzinfo=timezone.utc)
        assert updated.updated_at == datetime(2025, 1, 15, 8, 0, tzinfo=timezone.utc)

    async def test_save_with_unknown_id_upserts(self, activity_repo):
        saved = await activity_repo.save(Activity(id="legacy-1", user_id="user_123"))

        assert saved.id == "legacy-1"
        assert await activity_repo.exists_by_id("legacy-1")

    async def test_find_by_user_id_scenario(self, activity_repo):
        """Three saves for u1, u1, u2."""
        await activity_repo.save(Activity(user_id="u1", type=ActivityType.RUNNING))
        await activity_repo.save(Activity(user_id="u1", type=ActivityType.WALKING))
        await activity_repo.save(Activity(user_id="u2", type=ActivityType.YOGA))

        u1 = await activity_repo.find_by_user_id("u1")
        u2 = await activity_repo.find_by_user_id("u2")

        assert len(u1) == 2
        assert {a.type for a in u1} == {ActivityType.RUNNING, ActivityType.WALKING}
        assert all(a.user_id == "u1" for a in u1)
        assert len(u2) == 1
        assert await activity_repo.find_by_user_id("u3") == []

    async def test_delete_by_id(self, activity_repo):
        saved = await activity_repo.save(Activity(user_id="user_123"))

        await activity_repo.delete_by_id(saved.id)

        assert await activity_repo.find_by_id(saved.id) is None
        assert await activity_repo.count() == 0

    async def test_delete_missing_is_noop(self, activity_repo):
        await activity_repo.save(Activity(user_id="user_123"))

        await activity_repo.delete_by_id("missing")

        assert await activity_repo.count() == 1

    async def test_save_all_and_find_all(self, activity_repo):
        saved = await activity_repo.save_all(
            [Activity(user_id="u1"), Activity(user_id="u2")]
        )

        assert len(saved) == 2
        assert {a.id for a in await activity_repo.find_all()} == {a.id for a in saved}

    async def test_returned_entities_are_detached(self, activity_repo):
        saved = await activity_repo.save(
            Activity(user_id="user_123", additional_metrics={"steps": 1000})
        )

        saved.additional_metrics["steps"] = 0

        found = await activity_repo.find_by_id(saved.id)
        assert found.additional_metrics == {"steps": 1000}

    async def test_save_normalizes_start_time(self, activity_repo):
        saved = await activity_repo.save(
            Activity(user_id="user_123", start_time=datetime(2025, 1, 15, 7, 30, 0, 123456))
        )

        expected = datetime(2025, 1, 15, 7, 30, 0, 123000, tzinfo=timezone.utc)
        assert saved.start_time == expected
        assert (await activity_repo.find_by_id(saved.id)).start_time == expected

    async def test_non_canonical_hex_id_kept_verbatim(self, activity_repo):
        saved = await activity_repo.save(Activity(id="6650C0D2E4B0A1B2C3D4E5F6", user_id="u1"))

        assert saved.id == "6650C0D2E4B0A1B2C3D4E5F6"
        assert await activity_repo.exists_by_id("6650C0D2E4B0A1B2C3D4E5F6")

    async def test_clear(self, activity_repo):
        await activity_repo.save(Activity(user_id="user_123"))

        activity_repo.clear()

        assert await activity_repo.count() == 0
