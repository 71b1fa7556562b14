"""Shared test fixtures for settings, tenants and meeting records."""

from datetime import UTC, datetime, timedelta

import pytest

from meeting_compliance.core.config import Settings
from meeting_compliance.lib.meetings import (
    ActionType,
    AttendanceStatus,
    GoverningBody,
    Meeting,
    MeetingAction,
    MeetingAttendance,
    MeetingStatus,
    TenantContext,
)

NOW = datetime(2025, 3, 3, 12, 0, tzinfo=UTC)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def tenant() -> TenantContext:
    return TenantContext(tenant_id="town-of-fishers", user_id="clerk-1")


@pytest.fixture
def body() -> GoverningBody:
    """Seven-seat council with a simple-majority quorum."""
    return GoverningBody(id="council", total_seats=7, name="Town Council")


def make_attendance(meeting_id: str, present: int, absent: int = 0) -> tuple[MeetingAttendance, ...]:
    """Attendance with members m1..mN present followed by absent members."""
    records = [MeetingAttendance(meeting_id, f"m{n}", AttendanceStatus.PRESENT) for n in range(1, present + 1)]
    records += [
        MeetingAttendance(meeting_id, f"m{n}", AttendanceStatus.ABSENT)
        for n in range(present + 1, present + absent + 1)
    ]
    return tuple(records)


@pytest.fixture
def motion() -> MeetingAction:
    return MeetingAction(
        id="motion-1",
        meeting_id="mtg-1",
        action_type=ActionType.MOTION,
        title="Approve rezoning",
        agenda_item_id="item-1",
        moved_by="m1",
        seconded_by="m2",
    )


@pytest.fixture
def meeting(motion: MeetingAction) -> Meeting:
    """A meeting in progress with five of seven members present and one seconded motion."""
    return Meeting(
        id="mtg-1",
        status=MeetingStatus.IN_PROGRESS,
        scheduled_start=NOW + timedelta(days=3),
        governing_body_id="council",
        attendance=make_attendance("mtg-1", present=5, absent=2),
        actions=(motion,),
    )
