"""Tests for ISO week keys."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from launch_deck.services.competition import (
    compute_iso_week,
    get_current_week_number,
    get_previous_week_number,
)


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (datetime(2025, 12, 29, 12, 0, tzinfo=UTC), "2026-W01"),
        (datetime(2021, 1, 3, 23, 59, tzinfo=UTC), "2020-W53"),
        (datetime(2026, 1, 1, tzinfo=UTC), "2026-W01"),
        (datetime(2024, 12, 30, tzinfo=UTC), "2025-W01"),
        (datetime(2026, 2, 16, tzinfo=UTC), "2026-W08"),
    ],
)
def test_compute_iso_week(moment: datetime, expected: str) -> None:
    assert compute_iso_week(moment) == expected


def test_week_uses_utc_calendar_date() -> None:
    # Sunday 23:30 in New York is already Monday in UTC.
    eastern = timezone(timedelta(hours=-5))
    moment = datetime(2026, 1, 4, 23, 30, tzinfo=eastern)
    assert compute_iso_week(moment) == "2026-W02"


def test_naive_datetimes_are_treated_as_utc() -> None:
    assert compute_iso_week(datetime(2025, 12, 29)) == "2026-W01"


def test_previous_week_crosses_year_boundary() -> None:
    saturday = datetime(2026, 1, 3, 0, 0, tzinfo=UTC)
    assert get_current_week_number(saturday) == "2026-W01"
    assert get_previous_week_number(saturday) == "2025-W52"
