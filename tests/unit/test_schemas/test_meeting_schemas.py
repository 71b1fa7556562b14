"""Unit tests for meeting and findings Pydantic schemas."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from meeting_compliance.lib.findings import FindingsCaseType, create_findings_from_template
from meeting_compliance.lib.meetings import (
    ExecutiveSession,
    Meeting,
    MeetingCommand,
    MeetingStatus,
    Minutes,
)
from meeting_compliance.schemas.findings import FindingsSchema
from meeting_compliance.schemas.meetings import (
    GoverningBodySchema,
    MeetingSchema,
    MeetingTransitionRequest,
    TallyRequest,
)


class TestMeetingSchema:
    """Tests for converting meetings to and from their domain form."""

    def test_to_domain_builds_tuples(self, meeting: Meeting) -> None:
        schema = MeetingSchema.model_validate(meeting)
        domain = schema.to_domain()
        assert isinstance(domain.attendance, tuple)
        assert isinstance(domain.actions, tuple)
        assert domain.attendance == meeting.attendance
        assert domain.actions == meeting.actions

    def test_nested_records_read_from_attributes(self, meeting: Meeting) -> None:
        session = ExecutiveSession(id="es-1", meeting_id="mtg-1", basis_code="PERSONNEL")
        minutes = Minutes(id="min-1", meeting_id="mtg-1")
        schema = MeetingSchema.model_validate(
            Meeting(
                id="mtg-1",
                status=MeetingStatus.ADJOURNED,
                scheduled_start=meeting.scheduled_start,
                executive_sessions=(session,),
                minutes=minutes,
            )
        )
        assert schema.executive_sessions[0].basis_code == "PERSONNEL"
        assert schema.minutes is not None
        assert schema.to_domain().minutes == minutes

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MeetingSchema(id="m", status="POSTPONED", scheduled_start=datetime(2025, 3, 6, tzinfo=UTC))

    def test_naive_scheduled_start_rejected(self) -> None:
        with pytest.raises(ValidationError, match="timezone"):
            MeetingSchema(id="m", status="DRAFT", scheduled_start=datetime(2025, 3, 6, 19, 0))


class TestRequestValidation:
    def test_negative_seats(self) -> None:
        with pytest.raises(ValidationError):
            GoverningBodySchema(id="b", total_seats=-1)

    def test_transition_needs_exactly_one_target(self, meeting: Meeting) -> None:
        payload = MeetingSchema.model_validate(meeting)
        with pytest.raises(ValidationError, match="exactly one"):
            MeetingTransitionRequest(meeting=payload)
        with pytest.raises(ValidationError, match="exactly one"):
            MeetingTransitionRequest(meeting=payload, to_status=MeetingStatus.ADJOURNED, command=MeetingCommand.ADJOURN)
        assert MeetingTransitionRequest(meeting=payload, command=MeetingCommand.ADJOURN).command == "adjourn"

    @pytest.mark.parametrize("threshold", [-0.1, 1.0])
    def test_pass_threshold_bounds(self, threshold: float) -> None:
        with pytest.raises(ValidationError):
            TallyRequest(votes=[], pass_threshold=threshold)


class TestFindingsSchema:
    def test_round_trip_keeps_criteria_order(self) -> None:
        findings = create_findings_from_template("f-1", FindingsCaseType.USE_VARIANCE)
        schema = FindingsSchema.model_validate(findings)
        assert [c.criterion_number for c in schema.criteria] == [1, 2, 3, 4, 5]
        assert schema.to_domain() == findings
