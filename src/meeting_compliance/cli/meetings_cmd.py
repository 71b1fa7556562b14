"""CLI commands for meeting workflow lookups.

Provides status transition listings, a quorum calculator and the list of
executive session bases.
"""

from typing import Annotated

import typer

from meeting_compliance.lib.meetings import (
    AGENDA_ITEM_STATE_MACHINE,
    AGENDA_STATE_MACHINE,
    EXEC_SESSION_BASES,
    EXECUTIVE_SESSION_STATE_MACHINE,
    MEETING_STATE_MACHINE,
    MINUTES_STATE_MACHINE,
    AttendanceStatus,
    GoverningBody,
    MeetingAttendance,
    MemberRecusal,
    QuorumType,
    StateMachine,
    calculate_quorum,
)

meetings_app = typer.Typer()

_MACHINES: dict[str, StateMachine] = {
    "meeting": MEETING_STATE_MACHINE,
    "agenda": AGENDA_STATE_MACHINE,
    "agenda-item": AGENDA_ITEM_STATE_MACHINE,
    "executive-session": EXECUTIVE_SESSION_STATE_MACHINE,
    "minutes": MINUTES_STATE_MACHINE,
}


@meetings_app.command("transitions")
def transitions(
    entity: Annotated[str, typer.Argument(help="meeting, agenda, agenda-item, executive-session or minutes")],
    status: Annotated[str, typer.Argument(help="Current status, e.g. DRAFT")],
) -> None:
    """List the statuses reachable from STATUS."""
    machine = _MACHINES.get(entity)
    if machine is None:
        typer.echo(f"Error: unknown entity {entity!r}. Choose from: {', '.join(_MACHINES)}", err=True)
        raise typer.Exit(code=1)
    try:
        current = machine.parse_status(status.upper())
    except ValueError as e:
        typer.echo(f"Error: {status!r} is not a {entity} status", err=True)
        raise typer.Exit(code=1) from e

    targets = sorted(str(s) for s in machine.allowed_targets(current))
    if not targets:
        typer.echo(f"{current} is terminal")
        return
    typer.echo(f"{current} -> {', '.join(targets)}")


@meetings_app.command("quorum")
def quorum(
    seats: Annotated[int, typer.Option("--seats", help="Total seats on the body")],
    present: Annotated[int, typer.Option("--present", help="Members present")],
    recused: Annotated[int, typer.Option("--recused", help="Present members recused from the item")] = 0,
    quorum_type: Annotated[QuorumType, typer.Option("--type", help="Quorum rule")] = QuorumType.MAJORITY,
    quorum_number: Annotated[int | None, typer.Option("--number", help="Quorum for SPECIFIC bodies")] = None,
) -> None:
    """Check whether quorum is met for a body and attendance count."""
    body = GoverningBody(id="cli", total_seats=seats, quorum_type=quorum_type, quorum_number=quorum_number)
    attendance = [MeetingAttendance("cli", f"member-{n}", AttendanceStatus.PRESENT) for n in range(present)]
    recusals = [MemberRecusal(f"recusal-{n}", "cli", f"member-{n}") for n in range(min(recused, present))]
    result = calculate_quorum(body, attendance, recusals)

    verdict = "met" if result.is_quorum_met else "NOT met"
    typer.echo(
        f"Quorum {verdict}: {result.eligible_voters} eligible of {result.present_members} present, "
        f"{result.required_for_quorum} required ({result.total_members} seats)"
    )
    if not result.is_quorum_met:
        raise typer.Exit(code=1)


@meetings_app.command("exec-bases")
def exec_bases() -> None:
    """List the statutory bases for executive sessions."""
    for basis in EXEC_SESSION_BASES:
        typer.echo(f"{basis.code}: {basis.description} ({basis.cite})")
