"""Unit tests for the Activity entity and time helpers."""

from datetime import datetime, timedelta, timezone

import pytest
from freezegun import freeze_time

from domain.activity.exceptions import InvalidActivityError
from domain.activity.model import Activity, ActivityType, truncate_to_millis, utc_now


class TestActivity:
    """Test Activity construction and invariants."""

    def test_defaults(self):
        activity = Activity(user_id="user_123")

        assert activity.id is None
        assert activity.type is None
        assert activity.duration is None
        assert activity.additional_metrics == {}
        assert activity.created_at is None
        assert activity.is_new()

    def test_full_construction(self):
        start = datetime(2025, 1, 15, 7, 30, tzinfo=timezone.utc)
        activity = Activity(
            user_id="user_123",
            type=ActivityType.RUNNING,
            duration=30,
            calories_burned=300,
            start_time=start,
            additional_metrics={"distanceKm": 5.2},
        )

        assert activity.type is ActivityType.RUNNING
        assert activity.calories_burned == 300
        assert activity.start_time == start
        assert activity.additional_metrics["distanceKm"] == 5.2

    @pytest.mark.parametrize("user_id", ["", "   "])
    def test_blank_user_id_rejected(self, user_id):
        with pytest.raises(InvalidActivityError) as exc_info:
            Activity(user_id=user_id)

        assert exc_info.value.field == "user_id"

    def test_empty_id_rejected(self):
        with pytest.raises(InvalidActivityError) as exc_info:
            Activity(user_id="user_123", id="")

        assert exc_info.value.field == "id"

    def test_type_accepts_string_value(self):
        activity = Activity(user_id="user_123", type="CYCLING")  # type: ignore[arg-type]

        assert activity.type is ActivityType.CYCLING

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidActivityError, match="unknown activity type"):
            Activity(user_id="user_123", type="SKYDIVING")  # type: ignore[arg-type]

    def test_datetimes_normalized_on_construction(self):
        activity = Activity(
            user_id="user_123",
            start_time=datetime(2025, 1, 15, 7, 30, 0, 123456),
            created_at=datetime(2025, 1, 15, 9, 0, 0, 999999, tzinfo=timezone(timedelta(hours=2))),
        )

        assert activity.start_time == datetime(2025, 1, 15, 7, 30, 0, 123000, tzinfo=timezone.utc)
        assert activity.start_time.tzinfo == timezone.utc
        assert activity.created_at == datetime(2025, 1, 15, 7, 0, 0, 999000, tzinfo=timezone.utc)
        assert activity.updated_at is None

    def test_non_datetime_start_time_rejected(self):
        with pytest.raises(InvalidActivityError) as exc_info:
            Activity(user_id="user_123", start_time="2025-01-15T07:30:00Z")  # type: ignore[arg-type]

        assert exc_info.value.field == "start_time"

    def test_additional_metrics_must_be_object(self):
        with pytest.raises(InvalidActivityError) as exc_info:
            Activity(user_id="user_123", additional_metrics=[1, 2])  # type: ignore[arg-type]

        assert exc_info.value.field == "additional_metrics"

    def test_with_id_returns_copy(self):
        activity = Activity(user_id="user_123")

        with_id = activity.with_id("6650c0d2e4b0a1b2c3d4e5f6")

        assert with_id.id == "6650c0d2e4b0a1b2c3d4e5f6"
        assert not with_id.is_new()
        assert activity.id is None


class TestTimeHelpers:
    """Test UTC/millisecond normalization."""

    def test_truncate_to_millis_drops_microseconds(self):
        dt = datetime(2025, 1, 15, 7, 30, 0, 123456, tzinfo=timezone.utc)

        assert truncate_to_millis(dt).microsecond == 123000

    def test_truncate_to_millis_naive_is_utc(self):
        result = truncate_to_millis(datetime(2025, 1, 15, 7, 30))

        assert result.tzinfo == timezone.utc
        assert result.hour == 7

    def test_truncate_to_millis_converts_offset(self):
        cet = timezone(timedelta(hours=2))

        result = truncate_to_millis(datetime(2025, 1, 15, 9, 30, tzinfo=cet))

        assert result == datetime(2025, 1, 15, 7, 30, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)

    @freeze_time("2025-01-15 07:30:00.123456")
    def test_utc_now_is_truncated(self):
        assert utc_now() == datetime(2025, 1, 15, 7, 30, 0, 123000, tzinfo=timezone.utc)
