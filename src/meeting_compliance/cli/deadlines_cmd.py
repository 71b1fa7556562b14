"""CLI commands for publication deadlines.

Provides calculation of a hearing's publication plan and a listing of the
statutory publication rules.
"""

from datetime import date
from typing import Annotated

import typer
from loguru import logger

from meeting_compliance.core.config import get_settings
from meeting_compliance.core.dependencies import build_deadline_calculator
from meeting_compliance.lib.meetings import MeetingsError
from meeting_compliance.lib.publication import (
    DayOfWeek,
    NewspaperSchedule,
    default_indiana_rules,
)

deadlines_app = typer.Typer()


def _parse_days(value: str) -> frozenset[DayOfWeek]:
    """Parse a comma-separated list of weekday names (``MONDAY,THURSDAY``)."""
    try:
        return frozenset(DayOfWeek(part.strip().upper()) for part in value.split(",") if part.strip())
    except ValueError as e:
        msg = f"Unknown weekday in {value!r}"
        raise typer.BadParameter(msg) from e


@deadlines_app.command("calculate")
def calculate(
    hearing_date: Annotated[str, typer.Option("--hearing-date", help="Hearing date (YYYY-MM-DD)")],
    reason: Annotated[str, typer.Option("--reason", help="Notice reason, e.g. BOND_HEARING")],
    publication_days: Annotated[
        str | None,
        typer.Option("--publication-days", help="Newspaper publication weekdays, comma-separated"),
    ] = None,
    lead_days: Annotated[int, typer.Option("--lead-days", help="Newspaper submission lead days")] = 3,
) -> None:
    """Calculate the publications and submission deadlines for a hearing."""
    calculator = build_deadline_calculator(get_settings())
    schedule = None
    if publication_days:
        schedule = NewspaperSchedule(
            publication_days=_parse_days(publication_days), submission_lead_days=lead_days, name="cli"
        )

    try:
        result = calculator.calculate_deadlines(date.fromisoformat(hearing_date), reason, schedule)
    except (MeetingsError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    logger.debug(f"Deadline calculation for {reason} on {hearing_date} complete")
    typer.echo(f"{result.rule.notice_reason} ({result.rule.statutory_cite}) hearing on {result.hearing_date}")
    if not result.has_publication_obligation:
        typer.echo("No newspaper publication required.")
        return
    for publication in result.required_publications:
        typer.echo(
            f"  Publication {publication.publication_number}: by {publication.latest_publication_date}, "
            f"submit by {publication.submission_deadline:%Y-%m-%d %H:%M %Z}"
        )
    typer.echo(f"Risk: {result.risk_level}")
    if result.risk_message:
        typer.echo(result.risk_message)


@deadlines_app.command("rules")
def rules() -> None:
    """List the statutory publication rules."""
    for rule in default_indiana_rules():
        consecutive = ", consecutive weeks" if rule.must_be_consecutive else ""
        typer.echo(
            f"{rule.notice_reason}: {rule.required_publications} publication(s), "
            f"{rule.required_lead_days} days before{consecutive} ({rule.statutory_cite})"
        )
