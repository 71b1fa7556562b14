"""Quorum calculation and vote tallying.

Quorum counts members marked PRESENT or LATE, minus members recused for the
matter at hand. Vote tallies exclude recused members regardless of the
value they attempted to record.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from meeting_compliance.lib.meetings.types import (
    PRESENT_STATUSES,
    GoverningBody,
    MeetingAttendance,
    MemberRecusal,
    QuorumType,
    VoteRecord,
    VoteValue,
)

SIMPLE_MAJORITY_THRESHOLD = 0.5
SUPER_MAJORITY_FRACTION = 2 / 3


@dataclass(frozen=True)
class QuorumResult:
    """Outcome of a quorum calculation."""

    is_quorum_met: bool
    total_members: int
    present_members: int
    recused_members: int
    required_for_quorum: int
    eligible_voters: int


@dataclass(frozen=True)
class VoteTally:
    """Counts of each vote value for a single action.

    Attributes:
        yea: Votes in favor.
        nay: Votes against.
        abstain: Abstentions.
        absent: Members recorded absent for the vote.
        recused: Votes overridden or recorded as recused.
        total: Number of vote records considered.
        passed: Whether the action carried.
        margin: ``yea - nay``.
    """

    yea: int
    nay: int
    abstain: int
    absent: int
    recused: int
    total: int
    passed: bool
    margin: int

    @property
    def voting_members(self) -> int:
        """Members whose vote counts toward the pass threshold."""
        return self.yea + self.nay


def calculate_required_quorum(quorum_type: QuorumType, total_members: int, quorum_number: int | None = None) -> int:
    """Number of eligible members needed to conduct business.

    MAJORITY is ``floor(n/2) + 1``; TWO_THIRDS is ``ceil(2n/3)``; SPECIFIC
    uses ``quorum_number`` and falls back to majority when it is unset.
    """
    majority = total_members // 2 + 1
    if quorum_type == QuorumType.TWO_THIRDS:
        return math.ceil(total_members * 2 / 3)
    if quorum_type == QuorumType.SPECIFIC and quorum_number is not None:
        return quorum_number
    return majority


def recusals_for_item(recusals: Iterable[MemberRecusal], agenda_item_id: str | None = None) -> list[MemberRecusal]:
    """Recusals relevant to an agenda item.

    With an item, both item-specific and meeting-wide recusals apply.
    Without one, only meeting-wide recusals do.
    """
    if agenda_item_id is None:
        return [r for r in recusals if r.is_meeting_wide]
    return [r for r in recusals if r.is_meeting_wide or r.agenda_item_id == agenda_item_id]


def _present_member_ids(attendance: Iterable[MeetingAttendance]) -> list[str]:
    return [a.member_id for a in attendance if a.status in PRESENT_STATUSES]


def calculate_quorum(
    body: GoverningBody,
    attendance: Sequence[MeetingAttendance],
    recusals: Sequence[MemberRecusal] = (),
    agenda_item_id: str | None = None,
) -> QuorumResult:
    """Calculate quorum for a meeting, or for one agenda item when ``agenda_item_id`` is given.

    Args:
        body: The governing body whose seats define the quorum.
        attendance: Attendance records for the meeting.
        recusals: Recusal records disclosed in the meeting.
        agenda_item_id: Optional agenda item for item-level quorum.

    Returns:
        QuorumResult with the counts used in the decision.
    """
    present = len(_present_member_ids(attendance))
    recused = len({r.member_id for r in recusals_for_item(recusals, agenda_item_id)})
    required = calculate_required_quorum(body.quorum_type, body.total_seats, body.quorum_number)
    eligible = present - recused

    return QuorumResult(
        is_quorum_met=eligible >= required,
        total_members=body.total_seats,
        present_members=present,
        recused_members=recused,
        required_for_quorum=required,
        eligible_voters=eligible,
    )


def tally_votes(
    votes: Iterable[VoteRecord],
    recusals: Iterable[MemberRecusal] = (),
    pass_threshold: float = SIMPLE_MAJORITY_THRESHOLD,
) -> VoteTally:
    """Tally votes, counting any vote by a recused member as recused.

    Only yea and nay votes count toward the threshold. The action passes
    when at least one such vote exists and ``yea / (yea + nay)`` is strictly
    greater than ``pass_threshold``.
    """
    recused_ids = {r.member_id for r in recusals}
    counts = dict.fromkeys(VoteValue, 0)
    total = 0

    for vote in votes:
        total += 1
        if vote.is_recused or vote.member_id in recused_ids:
            counts[VoteValue.RECUSED] += 1
        else:
            counts[vote.vote] += 1

    yea = counts[VoteValue.YEA]
    nay = counts[VoteValue.NAY]
    voting = yea + nay
    return VoteTally(
        yea=yea,
        nay=nay,
        abstain=counts[VoteValue.ABSTAIN],
        absent=counts[VoteValue.ABSENT],
        recused=counts[VoteValue.RECUSED],
        total=total,
        passed=voting > 0 and yea / voting > pass_threshold,
        margin=yea - nay,
    )


def did_super_majority_pass(tally: VoteTally) -> bool:
    """True when at least two thirds of the yea/nay votes are yea."""
    if tally.voting_members == 0:
        return False
    return tally.yea / tally.voting_members >= SUPER_MAJORITY_FRACTION


def format_vote_tally(tally: VoteTally) -> str:
    """Render a tally for the minutes, e.g. ``PASSED (3 yea, 1 nay, 1 recused)``."""
    parts = []
    if tally.yea:
        parts.append(f"{tally.yea} yea")
    if tally.nay:
        parts.append(f"{tally.nay} nay")
    if tally.abstain:
        parts.append(f"{tally.abstain} abstaining")
    if tally.absent:
        parts.append(f"{tally.absent} absent")
    if tally.recused:
        parts.append(f"{tally.recused} recused")
    result = "PASSED" if tally.passed else "FAILED"
    return f"{result} ({', '.join(parts) or 'no votes'})"


def members_not_voted(
    votes: Iterable[VoteRecord],
    attendance: Iterable[MeetingAttendance],
    recusals: Iterable[MemberRecusal] = (),
) -> list[str]:
    """Present, non-recused members with no vote record, in attendance order."""
    recused_ids = {r.member_id for r in recusals}
    voted_ids = {v.member_id for v in votes}
    return [
        member_id
        for member_id in _present_member_ids(attendance)
        if member_id not in recused_ids and member_id not in voted_ids
    ]


def have_all_members_voted(
    votes: Iterable[VoteRecord],
    attendance: Iterable[MeetingAttendance],
    recusals: Iterable[MemberRecusal] = (),
) -> bool:
    return not members_not_voted(votes, attendance, recusals)
