"""Transition tables for every governed meeting entity.

Each table is an explicit ``status -> frozenset[status]`` mapping. Terminal
states map to the empty set. No status change happens anywhere in the
package without passing through ``StateMachine.validate_transition``.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

from meeting_compliance.lib.meetings.errors import InvalidTransitionError
from meeting_compliance.lib.meetings.types import (
    AgendaItemStatus,
    AgendaStatus,
    ExecutiveSessionStatus,
    MeetingStatus,
    MinutesStatus,
)


@dataclass(frozen=True)
class StateMachine:
    """A named, immutable transition table.

    Attributes:
        entity: Entity name used in error messages.
        transitions: Legal target statuses keyed by current status.
    """

    entity: str
    transitions: Mapping[StrEnum, frozenset[StrEnum]]

    def allowed_targets(self, from_status: StrEnum) -> frozenset[StrEnum]:
        """Statuses reachable in one step from ``from_status``."""
        return self.transitions.get(from_status, frozenset())

    def can_transition(self, from_status: StrEnum, to_status: StrEnum) -> bool:
        return to_status in self.allowed_targets(from_status)

    def is_terminal(self, status: StrEnum) -> bool:
        return not self.allowed_targets(status)

    def parse_status(self, value: str) -> StrEnum:
        """Convert a raw status string into this table's status enum.

        Raises:
            ValueError: If ``value`` is not a status of this entity.
        """
        status_type = type(next(iter(self.transitions)))
        return status_type(value)

    def validate_transition(self, from_status: StrEnum, to_status: StrEnum) -> None:
        """Raise ``InvalidTransitionError`` unless ``from_status -> to_status`` is legal."""
        if not self.can_transition(from_status, to_status):
            raise InvalidTransitionError(self.entity, from_status, to_status, self.allowed_targets(from_status))


MEETING_STATE_MACHINE: StateMachine = StateMachine(
    "meeting",
    {
        MeetingStatus.DRAFT: frozenset({MeetingStatus.SCHEDULED, MeetingStatus.CANCELLED}),
        MeetingStatus.SCHEDULED: frozenset(
            {MeetingStatus.NOTICED, MeetingStatus.IN_PROGRESS, MeetingStatus.CANCELLED, MeetingStatus.DRAFT}
        ),
        MeetingStatus.NOTICED: frozenset({MeetingStatus.IN_PROGRESS, MeetingStatus.CANCELLED, MeetingStatus.SCHEDULED}),
        MeetingStatus.IN_PROGRESS: frozenset({MeetingStatus.RECESSED, MeetingStatus.ADJOURNED}),
        MeetingStatus.RECESSED: frozenset({MeetingStatus.IN_PROGRESS, MeetingStatus.ADJOURNED}),
        MeetingStatus.ADJOURNED: frozenset(),
        MeetingStatus.CANCELLED: frozenset({MeetingStatus.DRAFT}),
    },
)

AGENDA_STATE_MACHINE: StateMachine = StateMachine(
    "agenda",
    {
        AgendaStatus.DRAFT: frozenset({AgendaStatus.PENDING_APPROVAL, AgendaStatus.PUBLISHED}),
        AgendaStatus.PENDING_APPROVAL: frozenset({AgendaStatus.APPROVED, AgendaStatus.DRAFT}),
        AgendaStatus.APPROVED: frozenset({AgendaStatus.PUBLISHED, AgendaStatus.DRAFT}),
        AgendaStatus.PUBLISHED: frozenset({AgendaStatus.AMENDED}),
        AgendaStatus.AMENDED: frozenset(),
    },
)

AGENDA_ITEM_STATE_MACHINE: StateMachine = StateMachine(
    "agenda item",
    {
        AgendaItemStatus.PENDING: frozenset(
            {AgendaItemStatus.IN_PROGRESS, AgendaItemStatus.TABLED, AgendaItemStatus.WITHDRAWN}
        ),
        AgendaItemStatus.IN_PROGRESS: frozenset(
            {AgendaItemStatus.DISCUSSED, AgendaItemStatus.TABLED, AgendaItemStatus.ACTED_UPON}
        ),
        AgendaItemStatus.DISCUSSED: frozenset({AgendaItemStatus.ACTED_UPON, AgendaItemStatus.TABLED}),
        AgendaItemStatus.TABLED: frozenset({AgendaItemStatus.PENDING, AgendaItemStatus.WITHDRAWN}),
        AgendaItemStatus.WITHDRAWN: frozenset(),
        AgendaItemStatus.ACTED_UPON: frozenset(),
    },
)

EXECUTIVE_SESSION_STATE_MACHINE: StateMachine = StateMachine(
    "executive session",
    {
        ExecutiveSessionStatus.PENDING: frozenset(
            {ExecutiveSessionStatus.IN_SESSION, ExecutiveSessionStatus.CANCELLED}
        ),
        ExecutiveSessionStatus.IN_SESSION: frozenset({ExecutiveSessionStatus.ENDED}),
        ExecutiveSessionStatus.ENDED: frozenset({ExecutiveSessionStatus.CERTIFIED}),
        ExecutiveSessionStatus.CERTIFIED: frozenset(),
        ExecutiveSessionStatus.CANCELLED: frozenset(),
    },
)

MINUTES_STATE_MACHINE: StateMachine = StateMachine(
    "minutes",
    {
        MinutesStatus.DRAFT: frozenset({MinutesStatus.PENDING_APPROVAL}),
        MinutesStatus.PENDING_APPROVAL: frozenset({MinutesStatus.APPROVED, MinutesStatus.DRAFT}),
        MinutesStatus.APPROVED: frozenset({MinutesStatus.AMENDED}),
        MinutesStatus.AMENDED: frozenset(),
    },
)


class MeetingCommand(StrEnum):
    """Named verbs clerks use to move a meeting through its lifecycle."""

    SCHEDULE = "schedule"
    POST_NOTICE = "post_notice"
    START = "start"
    RECESS = "recess"
    RESUME = "resume"
    ADJOURN = "adjourn"
    CANCEL = "cancel"
    RESURRECT = "resurrect"


MEETING_COMMAND_TARGETS: Mapping[MeetingCommand, MeetingStatus] = {
    MeetingCommand.SCHEDULE: MeetingStatus.SCHEDULED,
    MeetingCommand.POST_NOTICE: MeetingStatus.NOTICED,
    MeetingCommand.START: MeetingStatus.IN_PROGRESS,
    MeetingCommand.RECESS: MeetingStatus.RECESSED,
    MeetingCommand.RESUME: MeetingStatus.IN_PROGRESS,
    MeetingCommand.ADJOURN: MeetingStatus.ADJOURNED,
    MeetingCommand.CANCEL: MeetingStatus.CANCELLED,
    MeetingCommand.RESURRECT: MeetingStatus.DRAFT,
}


def resolve_meeting_command(current: MeetingStatus, command: MeetingCommand) -> MeetingStatus:
    """Map an action verb to its target status, validated against the meeting table.

    Raises:
        InvalidTransitionError: If the verb is not legal from ``current``.
    """
    target = MEETING_COMMAND_TARGETS[command]
    MEETING_STATE_MACHINE.validate_transition(current, target)
    return target


def available_meeting_commands(current: MeetingStatus) -> list[MeetingCommand]:
    """Verbs whose target is reachable from ``current``, in declaration order."""
    allowed = MEETING_STATE_MACHINE.allowed_targets(current)
    return [command for command, target in MEETING_COMMAND_TARGETS.items() if target in allowed]


def can_edit_minutes(status: MinutesStatus) -> bool:
    """Minutes text may only change while DRAFT."""
    return status == MinutesStatus.DRAFT
