"""Unit tests for the deadline calculator and risk assessment."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from meeting_compliance.lib.meetings import RuleNotFoundError
from meeting_compliance.lib.publication import (
    RISK_MESSAGES,
    DayOfWeek,
    DeadlineCalculator,
    NewspaperSchedule,
    NoticeReason,
    PublicationRule,
    RiskLevel,
    assess_risk,
    calculate_deadlines,
    calculate_simple_deadline,
    default_indiana_rules,
    is_high_risk,
    risk_message,
)

INDY = ZoneInfo("America/Indiana/Indianapolis")

# Monday 2025-01-13 at 17:00 local
DEADLINE = datetime(2025, 1, 13, 17, 0, tzinfo=INDY)


class TestAssessRisk:
    """Risk is classified by business days left before the deadline."""

    @pytest.mark.parametrize(
        ("now", "expected"),
        [
            (datetime(2025, 1, 3, 9, 0, tzinfo=INDY), RiskLevel.LOW),  # 6 business days
            (datetime(2025, 1, 6, 9, 0, tzinfo=INDY), RiskLevel.MEDIUM),  # 5
            (datetime(2025, 1, 8, 9, 0, tzinfo=INDY), RiskLevel.MEDIUM),  # 3
            (datetime(2025, 1, 9, 9, 0, tzinfo=INDY), RiskLevel.MEDIUM),  # 2
            (datetime(2025, 1, 10, 9, 0, tzinfo=INDY), RiskLevel.HIGH),  # 1
            (datetime(2025, 1, 13, 9, 0, tzinfo=INDY), RiskLevel.HIGH),  # same day
            (datetime(2025, 1, 13, 18, 0, tzinfo=INDY), RiskLevel.IMPOSSIBLE),
        ],
    )
    def test_thresholds(self, now: datetime, expected: RiskLevel) -> None:
        assert assess_risk(DEADLINE, now) == expected

    def test_now_converted_to_deadline_zone(self) -> None:
        """03:00 UTC Saturday is still Friday evening in Indianapolis, which counts."""
        now = datetime(2025, 1, 11, 3, 0, tzinfo=UTC)
        assert assess_risk(DEADLINE, now) == RiskLevel.HIGH

    def test_messages(self) -> None:
        assert risk_message(RiskLevel.LOW) is None
        assert "cannot be met" in risk_message(RiskLevel.IMPOSSIBLE)
        assert RISK_MESSAGES[RiskLevel.HIGH] == risk_message(RiskLevel.HIGH)

    def test_is_high_risk(self) -> None:
        assert is_high_risk(RiskLevel.HIGH)
        assert is_high_risk(RiskLevel.IMPOSSIBLE)
        assert not is_high_risk(RiskLevel.MEDIUM)


class TestCalculateDeadlines:
    """Tests for DeadlineCalculator.calculate_deadlines."""

    @pytest.fixture
    def calculator(self) -> DeadlineCalculator:
        return DeadlineCalculator(registry=default_indiana_rules(), tz=INDY)

    def test_bond_hearing_two_publications_a_week_apart(self, calculator: DeadlineCalculator) -> None:
        now = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 2, 15), NoticeReason.BOND_HEARING, now=now)

        first, second = result.required_publications
        assert first.publication_number == 1
        assert second.publication_number == 2
        assert second.latest_publication_date <= date(2025, 2, 5)
        assert second.latest_publication_date - first.latest_publication_date == timedelta(days=7)
        assert first.latest_publication_date == date(2025, 1, 29)
        assert result.has_publication_obligation is True

    def test_fallback_submission_is_three_days_before_at_five_pm(self, calculator: DeadlineCalculator) -> None:
        now = datetime(2025, 1, 10, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 2, 15), NoticeReason.BOND_HEARING, now=now)

        assert result.earliest_submission_deadline == datetime(2025, 1, 26, 17, 0, tzinfo=INDY)
        assert result.required_publications[0].submission_deadline == result.earliest_submission_deadline
        assert result.risk_level == RiskLevel.LOW
        assert result.risk_message is None

    def test_snaps_to_newspaper_schedule(self, calculator: DeadlineCalculator) -> None:
        """With a Thursday paper, each target snaps back to the latest Thursday on or before it."""
        schedule = NewspaperSchedule(publication_days=frozenset({DayOfWeek.THURSDAY}), id="ledger")
        now = datetime(2025, 1, 2, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 2, 15), NoticeReason.BOND_HEARING, schedule, now)

        dates = [p.latest_publication_date for p in result.required_publications]
        assert dates == [date(2025, 1, 23), date(2025, 1, 30)]
        assert all(p.newspaper_schedule_id == "ledger" for p in result.required_publications)
        assert result.earliest_submission_deadline == datetime(2025, 1, 20, 17, 0, tzinfo=INDY)

    def test_consecutive_editions_stay_distinct_around_closure(self, calculator: DeadlineCalculator) -> None:
        """A closed edition pushes the last publication back, and the earlier one a week before that."""
        schedule = NewspaperSchedule(
            publication_days=frozenset({DayOfWeek.THURSDAY}), holiday_closures=frozenset({date(2025, 1, 30)})
        )
        now = datetime(2025, 1, 2, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 2, 15), NoticeReason.BOND_HEARING, schedule, now)

        dates = [p.latest_publication_date for p in result.required_publications]
        assert dates == [date(2025, 1, 16), date(2025, 1, 23)]

    def test_single_publication(self, calculator: DeadlineCalculator) -> None:
        now = datetime(2025, 1, 2, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 3, 1), NoticeReason.VARIANCE_HEARING, now=now)
        assert len(result.required_publications) == 1
        assert result.required_publications[0].latest_publication_date == date(2025, 2, 19)

    def test_non_consecutive_publications_share_target(self, calculator: DeadlineCalculator) -> None:
        now = datetime(2025, 1, 2, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 3, 1), NoticeReason.BUDGET_HEARING, now=now)
        assert [p.latest_publication_date for p in result.required_publications] == [
            date(2025, 2, 19),
            date(2025, 2, 19),
        ]

    def test_zero_publication_rule(self, calculator: DeadlineCalculator) -> None:
        now = datetime(2025, 1, 2, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 3, 1), NoticeReason.OPEN_DOOR_MEETING, now=now)

        assert result.required_publications == ()
        assert result.has_publication_obligation is False
        assert result.earliest_submission_deadline == now + timedelta(days=365)
        assert result.risk_level == RiskLevel.LOW

    def test_past_deadline_is_impossible(self, calculator: DeadlineCalculator) -> None:
        now = datetime(2025, 2, 14, 12, 0, tzinfo=UTC)
        result = calculator.calculate_deadlines(date(2025, 2, 15), NoticeReason.BOND_HEARING, now=now)
        assert result.risk_level == RiskLevel.IMPOSSIBLE
        assert result.risk_message == RISK_MESSAGES[RiskLevel.IMPOSSIBLE]

    def test_aware_hearing_datetime_uses_local_date(self, calculator: DeadlineCalculator) -> None:
        hearing = datetime(2025, 2, 15, 3, 0, tzinfo=UTC)  # 22:00 on the 14th in Indianapolis
        result = calculator.calculate_deadlines(hearing, NoticeReason.VARIANCE_HEARING, now=DEADLINE)
        assert result.hearing_date == date(2025, 2, 14)

    def test_unknown_reason_raises(self, calculator: DeadlineCalculator) -> None:
        with pytest.raises(RuleNotFoundError):
            calculator.calculate_deadlines(date(2025, 2, 15), "NOT_A_REASON")

    def test_injected_registry_and_settings(self) -> None:
        registry = default_indiana_rules().with_rule(
            PublicationRule(NoticeReason.VARIANCE_HEARING, required_publications=1, required_lead_days=15)
        )
        calculator = DeadlineCalculator(
            registry=registry, tz=UTC, default_submission_lead_days=2, default_submission_time="09:30"
        )
        result = calculator.calculate_deadlines(
            date(2025, 3, 1), NoticeReason.VARIANCE_HEARING, now=datetime(2025, 1, 2, tzinfo=UTC)
        )
        publication = result.required_publications[0]
        assert publication.latest_publication_date == date(2025, 2, 14)
        assert publication.submission_deadline == datetime(2025, 2, 12, 9, 30, tzinfo=UTC)

    def test_module_level_helper(self) -> None:
        result = calculate_deadlines(
            date(2025, 2, 15), NoticeReason.BOND_HEARING, now=datetime(2025, 1, 10, 12, 0, tzinfo=UTC)
        )
        assert len(result.required_publications) == 2


class TestSimpleDeadline:
    def test_consecutive_steps_back_whole_weeks(self) -> None:
        result = calculate_simple_deadline(date(2025, 2, 15), 10, publications=2, consecutive=True, tz=INDY)
        assert result.latest_publication == date(2025, 1, 29)
        assert result.estimated_submission == datetime(2025, 1, 26, 17, 0, tzinfo=INDY)

    def test_single(self) -> None:
        result = calculate_simple_deadline(date(2025, 2, 15), 10, tz=INDY)
        assert result.latest_publication == date(2025, 2, 5)
