"""Unit tests for the status transition tables."""

import itertools
from enum import StrEnum

import pytest

from meeting_compliance.lib.meetings import (
    AGENDA_ITEM_STATE_MACHINE,
    AGENDA_STATE_MACHINE,
    EXECUTIVE_SESSION_STATE_MACHINE,
    MEETING_STATE_MACHINE,
    MINUTES_STATE_MACHINE,
    AgendaItemStatus,
    AgendaStatus,
    ExecutiveSessionStatus,
    InvalidTransitionError,
    MeetingCommand,
    MeetingsErrorCode,
    MeetingStatus,
    MinutesStatus,
    StateMachine,
    available_meeting_commands,
    can_edit_minutes,
    resolve_meeting_command,
)

M = MeetingStatus
A = AgendaStatus
I = AgendaItemStatus  # noqa: E741
E = ExecutiveSessionStatus
N = MinutesStatus

LEGAL: dict[str, tuple[StateMachine, type[StrEnum], set[tuple[StrEnum, StrEnum]]]] = {
    "meeting": (
        MEETING_STATE_MACHINE,
        MeetingStatus,
        {
            (M.DRAFT, M.SCHEDULED),
            (M.DRAFT, M.CANCELLED),
            (M.SCHEDULED, M.NOTICED),
            (M.SCHEDULED, M.IN_PROGRESS),
            (M.SCHEDULED, M.CANCELLED),
            (M.SCHEDULED, M.DRAFT),
            (M.NOTICED, M.IN_PROGRESS),
            (M.NOTICED, M.CANCELLED),
            (M.NOTICED, M.SCHEDULED),
            (M.IN_PROGRESS, M.RECESSED),
            (M.IN_PROGRESS, M.ADJOURNED),
            (M.RECESSED, M.IN_PROGRESS),
            (M.RECESSED, M.ADJOURNED),
            (M.CANCELLED, M.DRAFT),
        },
    ),
    "agenda": (
        AGENDA_STATE_MACHINE,
        AgendaStatus,
        {
            (A.DRAFT, A.PENDING_APPROVAL),
            (A.DRAFT, A.PUBLISHED),
            (A.PENDING_APPROVAL, A.APPROVED),
            (A.PENDING_APPROVAL, A.DRAFT),
            (A.APPROVED, A.PUBLISHED),
            (A.APPROVED, A.DRAFT),
            (A.PUBLISHED, A.AMENDED),
        },
    ),
    "agenda item": (
        AGENDA_ITEM_STATE_MACHINE,
        AgendaItemStatus,
        {
            (I.PENDING, I.IN_PROGRESS),
            (I.PENDING, I.TABLED),
            (I.PENDING, I.WITHDRAWN),
            (I.IN_PROGRESS, I.DISCUSSED),
            (I.IN_PROGRESS, I.TABLED),
            (I.IN_PROGRESS, I.ACTED_UPON),
            (I.DISCUSSED, I.ACTED_UPON),
            (I.DISCUSSED, I.TABLED),
            (I.TABLED, I.PENDING),
            (I.TABLED, I.WITHDRAWN),
        },
    ),
    "executive session": (
        EXECUTIVE_SESSION_STATE_MACHINE,
        ExecutiveSessionStatus,
        {
            (E.PENDING, E.IN_SESSION),
            (E.PENDING, E.CANCELLED),
            (E.IN_SESSION, E.ENDED),
            (E.ENDED, E.CERTIFIED),
        },
    ),
    "minutes": (
        MINUTES_STATE_MACHINE,
        MinutesStatus,
        {
            (N.DRAFT, N.PENDING_APPROVAL),
            (N.PENDING_APPROVAL, N.APPROVED),
            (N.PENDING_APPROVAL, N.DRAFT),
            (N.APPROVED, N.AMENDED),
        },
    ),
}


def _all_pairs():
    for name, (machine, statuses, legal) in LEGAL.items():
        for from_status, to_status in itertools.product(statuses, repeat=2):
            expected = (from_status, to_status) in legal
            yield pytest.param(machine, from_status, to_status, expected, id=f"{name}:{from_status}->{to_status}")


class TestTransitionTables:
    """Every (from, to) pair of every entity matches the published table."""

    @pytest.mark.parametrize(("machine", "from_status", "to_status", "expected"), list(_all_pairs()))
    def test_pair(self, machine: StateMachine, from_status: StrEnum, to_status: StrEnum, expected: bool) -> None:
        assert machine.can_transition(from_status, to_status) is expected
        if expected:
            machine.validate_transition(from_status, to_status)
        else:
            with pytest.raises(InvalidTransitionError):
                machine.validate_transition(from_status, to_status)

    @pytest.mark.parametrize(
        ("machine", "terminal"),
        [
            (MEETING_STATE_MACHINE, {M.ADJOURNED}),
            (AGENDA_STATE_MACHINE, {A.AMENDED}),
            (AGENDA_ITEM_STATE_MACHINE, {I.WITHDRAWN, I.ACTED_UPON}),
            (EXECUTIVE_SESSION_STATE_MACHINE, {E.CERTIFIED, E.CANCELLED}),
            (MINUTES_STATE_MACHINE, {N.AMENDED}),
        ],
    )
    def test_terminal_states(self, machine: StateMachine, terminal: set[StrEnum]) -> None:
        assert {s for s in machine.transitions if machine.is_terminal(s)} == terminal


class TestInvalidTransitionError:
    def test_error_lists_valid_targets(self) -> None:
        with pytest.raises(InvalidTransitionError) as exc_info:
            MEETING_STATE_MACHINE.validate_transition(M.DRAFT, M.ADJOURNED)
        error = exc_info.value
        assert error.code == MeetingsErrorCode.INVALID_TRANSITION
        assert error.details["allowed"] == ["CANCELLED", "SCHEDULED"]
        assert "CANCELLED, SCHEDULED" in error.message

    def test_terminal_message(self) -> None:
        with pytest.raises(InvalidTransitionError, match="terminal"):
            MEETING_STATE_MACHINE.validate_transition(M.ADJOURNED, M.DRAFT)


class TestParseStatus:
    def test_parses_own_statuses(self) -> None:
        assert MINUTES_STATE_MACHINE.parse_status("APPROVED") is MinutesStatus.APPROVED

    def test_rejects_other_entity_status(self) -> None:
        with pytest.raises(ValueError):
            MINUTES_STATE_MACHINE.parse_status("ADJOURNED")


class TestMeetingCommands:
    """Tests for the verb-based meeting API."""

    def test_resolve(self) -> None:
        assert resolve_meeting_command(M.NOTICED, MeetingCommand.START) == M.IN_PROGRESS
        assert resolve_meeting_command(M.CANCELLED, MeetingCommand.RESURRECT) == M.DRAFT

    def test_resolve_illegal(self) -> None:
        with pytest.raises(InvalidTransitionError):
            resolve_meeting_command(M.DRAFT, MeetingCommand.ADJOURN)

    def test_available_commands(self) -> None:
        assert available_meeting_commands(M.IN_PROGRESS) == [MeetingCommand.RECESS, MeetingCommand.ADJOURN]
        assert available_meeting_commands(M.ADJOURNED) == []


class TestCanEditMinutes:
    @pytest.mark.parametrize(
        ("status", "expected"),
        [(N.DRAFT, True), (N.PENDING_APPROVAL, False), (N.APPROVED, False), (N.AMENDED, False)],
    )
    def test_only_draft_editable(self, status: MinutesStatus, expected: bool) -> None:
        assert can_edit_minutes(status) is expected
