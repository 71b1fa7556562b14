"""Unit tests for findings templates, validation and locking."""

from dataclasses import replace
from datetime import datetime

import pytest

from meeting_compliance.lib.findings import (
    Determination,
    FindingsAction,
    FindingsCaseType,
    FindingsOfFact,
    FindingsStatus,
    MissingPart,
    add_condition,
    adopt_findings,
    create_findings_from_template,
    get_template,
    record_board_determination,
    reject_findings,
    remove_condition,
    submit_for_review,
    update_condition,
    update_staff_recommendation,
    validate_findings,
    validate_findings_for_action,
)
from meeting_compliance.lib.meetings import FindingsError, MeetingsErrorCode


def _decide(findings: FindingsOfFact, *determinations: Determination) -> FindingsOfFact:
    for criterion, determination in zip(findings.criteria, determinations, strict=True):
        findings = record_board_determination(findings, criterion.id, determination, "Testimony in the record.")
    return findings


@pytest.fixture
def dsv() -> FindingsOfFact:
    return create_findings_from_template("f-1", FindingsCaseType.DEVELOPMENT_VARIANCE, meeting_id="mtg-1")


class TestTemplates:
    """Tests for statutory criteria templates."""

    def test_development_variance(self, dsv: FindingsOfFact) -> None:
        assert dsv.status == FindingsStatus.DRAFT
        assert dsv.statutory_cite == "IC 36-7-4-918.5"
        assert [c.criterion_number for c in dsv.criteria] == [1, 2, 3]
        assert all(c.is_required for c in dsv.criteria)
        assert dsv.criteria[0].id == "f-1-c1"

    def test_use_variance_has_five_criteria(self) -> None:
        findings = create_findings_from_template("f-2", FindingsCaseType.USE_VARIANCE)
        assert len(findings.criteria) == 5
        assert findings.statutory_cite == "IC 36-7-4-918.4"

    def test_no_template(self) -> None:
        with pytest.raises(ValueError, match="No findings template"):
            get_template(FindingsCaseType.SUBDIVISION_WAIVER)


class TestValidateFindings:
    """Tests for completeness and can-approve / can-deny."""

    def test_fresh_findings_incomplete(self, dsv: FindingsOfFact) -> None:
        validation = validate_findings(dsv)
        assert validation.is_complete is False
        assert [m.missing for m in validation.missing_criteria] == [MissingPart.BOTH] * 3
        assert validation.can_approve is False
        assert validation.can_deny is False

    def test_missing_rationale(self, dsv: FindingsOfFact) -> None:
        findings = record_board_determination(dsv, "f-1-c1", Determination.MET, "   ")
        assert validate_findings(findings).missing_criteria[0].missing == MissingPart.RATIONALE

    def test_missing_determination(self, dsv: FindingsOfFact) -> None:
        criteria = (replace(dsv.criteria[0], board_rationale="because"), *dsv.criteria[1:])
        findings = replace(dsv, criteria=criteria)
        assert validate_findings(findings).missing_criteria[0].missing == MissingPart.DETERMINATION

    def test_all_met_supports_approval(self, dsv: FindingsOfFact) -> None:
        validation = validate_findings(_decide(dsv, *[Determination.MET] * 3))
        assert validation.is_complete is True
        assert validation.can_approve is True
        assert validation.can_deny is False

    def test_one_not_met_supports_denial(self, dsv: FindingsOfFact) -> None:
        findings = _decide(dsv, Determination.MET, Determination.NOT_MET, Determination.MET)
        validation = validate_findings(findings)
        assert validation.can_approve is False
        assert validation.can_deny is True
        assert validation.unmet_criteria == (2,)

    def test_unable_to_determine_blocks_approval_not_denial(self, dsv: FindingsOfFact) -> None:
        findings = _decide(dsv, Determination.MET, Determination.UNABLE_TO_DETERMINE, Determination.MET)
        validation = validate_findings(findings)
        assert validation.can_approve is False
        assert validation.can_deny is False

    def test_optional_criterion_ignored_for_decision(self, dsv: FindingsOfFact) -> None:
        criteria = (*dsv.criteria[:2], replace(dsv.criteria[2], is_required=False))
        findings = _decide(replace(dsv, criteria=criteria), Determination.MET, Determination.MET, Determination.NOT_MET)
        validation = validate_findings(findings)
        assert validation.can_approve is True
        assert validation.can_deny is False


class TestValidateForAction:
    def test_incomplete(self, dsv: FindingsOfFact) -> None:
        result = validate_findings_for_action(dsv, FindingsAction.APPROVE)
        assert result.error_code == MeetingsErrorCode.FINDINGS_INCOMPLETE
        assert len(result.details["missing_criteria"]) == 3

    def test_approve_not_supported(self, dsv: FindingsOfFact) -> None:
        findings = _decide(dsv, Determination.MET, Determination.NOT_MET, Determination.MET)
        result = validate_findings_for_action(findings, FindingsAction.APPROVE)
        assert result.error_code == MeetingsErrorCode.FINDINGS_NOT_SUPPORTED
        assert result.details["not_met_criteria"] == [2]

    def test_deny_not_supported(self, dsv: FindingsOfFact) -> None:
        findings = _decide(dsv, *[Determination.MET] * 3)
        result = validate_findings_for_action(findings, FindingsAction.DENY)
        assert result.error_code == MeetingsErrorCode.FINDINGS_NOT_SUPPORTED

    def test_supported(self, dsv: FindingsOfFact) -> None:
        findings = _decide(dsv, *[Determination.MET] * 3)
        assert validate_findings_for_action(findings, FindingsAction.APPROVE).valid is True


class TestEdits:
    """Tests for criterion and condition edits."""

    def test_staff_recommendation(self, dsv: FindingsOfFact) -> None:
        findings = update_staff_recommendation(dsv, "f-1-c2", Determination.NOT_MET, "Setback too small")
        assert findings.criteria[1].staff_recommendation == Determination.NOT_MET
        assert dsv.criteria[1].staff_recommendation is None

    def test_unknown_criterion(self, dsv: FindingsOfFact) -> None:
        with pytest.raises(FindingsError) as exc_info:
            record_board_determination(dsv, "nope", Determination.MET, "x")
        assert exc_info.value.code == MeetingsErrorCode.CRITERION_NOT_FOUND

    def test_conditions_numbered_sequentially(self, dsv: FindingsOfFact) -> None:
        findings = add_condition(dsv, "cond-1", "Landscape buffer")
        findings = add_condition(findings, "cond-2", "Hours limited")
        assert [c.condition_number for c in findings.conditions] == [1, 2]

        findings = update_condition(findings, "cond-1", "Six foot buffer")
        assert findings.conditions[0].condition_text == "Six foot buffer"

        findings = remove_condition(findings, "cond-1")
        findings = add_condition(findings, "cond-3", "Signage")
        assert [c.condition_number for c in findings.conditions] == [2, 3]

    @pytest.mark.parametrize(
        "edit", [lambda f: remove_condition(f, "nope"), lambda f: update_condition(f, "nope", "x")]
    )
    def test_missing_condition(self, dsv: FindingsOfFact, edit) -> None:
        with pytest.raises(FindingsError, match="Condition not found") as exc_info:
            edit(dsv)
        assert exc_info.value.code == MeetingsErrorCode.CONDITION_NOT_FOUND
        assert exc_info.value.details["condition_id"] == "nope"

    def test_submit_for_review(self, dsv: FindingsOfFact) -> None:
        assert submit_for_review(dsv).status == FindingsStatus.PENDING_REVIEW


class TestFinalize:
    """Tests for adoption, rejection and locking."""

    def test_adopt_locks(self, dsv: FindingsOfFact, now: datetime) -> None:
        adopted = adopt_findings(_decide(dsv, *[Determination.MET] * 3), "v-1", "chair", now=now)
        assert adopted.status == FindingsStatus.ADOPTED
        assert adopted.is_locked is True
        assert adopted.vote_record_id == "v-1"
        assert adopted.adopted_at == now
        assert adopted.adopted_by == "chair"

    def test_locked_findings_reject_edits(self, dsv: FindingsOfFact, now: datetime) -> None:
        adopted = adopt_findings(_decide(dsv, *[Determination.MET] * 3), now=now)
        for edit in (
            lambda f: record_board_determination(f, "f-1-c1", Determination.NOT_MET, "changed"),
            lambda f: add_condition(f, "cond-1", "late"),
            lambda f: adopt_findings(f),
        ):
            with pytest.raises(FindingsError) as exc_info:
                edit(adopted)
            assert exc_info.value.code == MeetingsErrorCode.FINDINGS_LOCKED

    def test_adopt_unsupported_raises(self, dsv: FindingsOfFact) -> None:
        findings = _decide(dsv, Determination.MET, Determination.NOT_MET, Determination.MET)
        with pytest.raises(FindingsError) as exc_info:
            adopt_findings(findings)
        assert exc_info.value.code == MeetingsErrorCode.FINDINGS_NOT_SUPPORTED

    def test_reject(self, dsv: FindingsOfFact, now: datetime) -> None:
        findings = _decide(dsv, Determination.MET, Determination.NOT_MET, Determination.MET)
        rejected = reject_findings(findings, "v-2", "chair", now=now)
        assert rejected.status == FindingsStatus.REJECTED
        assert rejected.is_locked is True
