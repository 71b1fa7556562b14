"""Meeting compliance library: state machines, quorum and statutory gates.

Public API:
    - Entity types: ``Meeting``, ``GoverningBody``, ``ExecutiveSession``,
      ``Minutes``, ``Agenda``, ``AgendaItem``, ``MeetingAction``,
      ``MeetingAttendance``, ``MemberRecusal``, ``VoteRecord``, ``TenantContext``
    - ``StateMachine`` and the five entity transition tables
    - ``resolve_meeting_command``: Map a clerk verb to a validated target status
    - ``calculate_quorum`` / ``tally_votes``: Quorum and vote engine
    - ``ValidationResult`` and the ``validate_*`` advisory checks
    - ``transition_*`` / ``record_vote``: Gated mutating operations
    - ``EntityStore``: Protocol for tenant-scoped entity stores
    - ``InMemoryEntityStore``: Dictionary-backed store with version checks
    - Domain errors: ``MeetingsError`` and subclasses
"""

from meeting_compliance.lib.meetings.compliance import (
    ValidationResult,
    apply_recusal,
    assert_compliance,
    certify_exec_session,
    elapsed_hours,
    filter_recused_votes,
    find_recusal,
    record_vote,
    transition_agenda,
    transition_agenda_item,
    transition_executive_session,
    transition_meeting,
    transition_minutes,
    validate_action_has_second,
    validate_all_exec_sessions_certified,
    validate_exec_session_post_cert,
    validate_exec_session_pre_cert,
    validate_meeting_schedule,
    validate_minutes_approval,
    validate_not_recused,
    validate_open_door_notice,
    validate_quorum,
    validate_vote_not_in_exec_session,
)
from meeting_compliance.lib.meetings.constants import (
    EXEC_SESSION_BASES,
    OPEN_DOOR_NOTICE_HOURS,
    ExecSessionBasis,
    MeetingsErrorCode,
    get_exec_session_basis,
)
from meeting_compliance.lib.meetings.errors import (
    ComplianceError,
    ConcurrencyError,
    FindingsError,
    InvalidTransitionError,
    MeetingsError,
    NotFoundError,
    RuleNotFoundError,
)
from meeting_compliance.lib.meetings.quorum import (
    QuorumResult,
    VoteTally,
    calculate_quorum,
    calculate_required_quorum,
    did_super_majority_pass,
    format_vote_tally,
    have_all_members_voted,
    members_not_voted,
    recusals_for_item,
    tally_votes,
)
from meeting_compliance.lib.meetings.state_machines import (
    AGENDA_ITEM_STATE_MACHINE,
    AGENDA_STATE_MACHINE,
    EXECUTIVE_SESSION_STATE_MACHINE,
    MEETING_COMMAND_TARGETS,
    MEETING_STATE_MACHINE,
    MINUTES_STATE_MACHINE,
    MeetingCommand,
    StateMachine,
    available_meeting_commands,
    can_edit_minutes,
    resolve_meeting_command,
)
from meeting_compliance.lib.meetings.storage import EntityStore, InMemoryEntityStore
from meeting_compliance.lib.meetings.types import (
    ActionResult,
    ActionType,
    Agenda,
    AgendaItem,
    AgendaItemStatus,
    AgendaStatus,
    AttendanceStatus,
    ExecutiveSession,
    ExecutiveSessionStatus,
    GoverningBody,
    Meeting,
    MeetingAction,
    MeetingAttendance,
    MeetingStatus,
    MemberRecusal,
    Minutes,
    MinutesStatus,
    QuorumType,
    TenantContext,
    VoteRecord,
    VoteValue,
)

__all__ = [
    "AGENDA_ITEM_STATE_MACHINE",
    "AGENDA_STATE_MACHINE",
    "EXECUTIVE_SESSION_STATE_MACHINE",
    "EXEC_SESSION_BASES",
    "MEETING_COMMAND_TARGETS",
    "MEETING_STATE_MACHINE",
    "MINUTES_STATE_MACHINE",
    "OPEN_DOOR_NOTICE_HOURS",
    "ActionResult",
    "ActionType",
    "Agenda",
    "AgendaItem",
    "AgendaItemStatus",
    "AgendaStatus",
    "AttendanceStatus",
    "ComplianceError",
    "ConcurrencyError",
    "EntityStore",
    "ExecSessionBasis",
    "ExecutiveSession",
    "ExecutiveSessionStatus",
    "FindingsError",
    "GoverningBody",
    "InMemoryEntityStore",
    "InvalidTransitionError",
    "Meeting",
    "MeetingAction",
    "MeetingAttendance",
    "MeetingCommand",
    "MeetingStatus",
    "MeetingsError",
    "MeetingsErrorCode",
    "MemberRecusal",
    "Minutes",
    "MinutesStatus",
    "NotFoundError",
    "QuorumResult",
    "QuorumType",
    "RuleNotFoundError",
    "StateMachine",
    "TenantContext",
    "ValidationResult",
    "VoteRecord",
    "VoteTally",
    "VoteValue",
    "apply_recusal",
    "assert_compliance",
    "available_meeting_commands",
    "calculate_quorum",
    "calculate_required_quorum",
    "can_edit_minutes",
    "certify_exec_session",
    "did_super_majority_pass",
    "elapsed_hours",
    "filter_recused_votes",
    "find_recusal",
    "format_vote_tally",
    "get_exec_session_basis",
    "have_all_members_voted",
    "members_not_voted",
    "record_vote",
    "recusals_for_item",
    "resolve_meeting_command",
    "tally_votes",
    "transition_agenda",
    "transition_agenda_item",
    "transition_executive_session",
    "transition_meeting",
    "transition_minutes",
    "validate_action_has_second",
    "validate_all_exec_sessions_certified",
    "validate_exec_session_post_cert",
    "validate_exec_session_pre_cert",
    "validate_meeting_schedule",
    "validate_minutes_approval",
    "validate_not_recused",
    "validate_open_door_notice",
    "validate_quorum",
    "validate_vote_not_in_exec_session",
]
