"""Findings service: template creation, edits and adoption against a store."""

import uuid
from datetime import datetime

from meeting_compliance.core.logging import audit_logger
from meeting_compliance.lib.findings import (
    Determination,
    FindingsCaseType,
    FindingsOfFact,
    add_condition,
    adopt_findings,
    create_findings_from_template,
    record_board_determination,
    reject_findings,
    update_staff_recommendation,
)
from meeting_compliance.lib.meetings import EntityStore, InMemoryEntityStore, TenantContext


def create_findings_store() -> EntityStore:
    return InMemoryEntityStore("findings", parent_field="meeting_id")


async def create_findings(
    store: EntityStore,
    tenant: TenantContext,
    case_type: FindingsCaseType,
    meeting_id: str | None = None,
    agenda_item_id: str | None = None,
) -> FindingsOfFact:
    """Create DRAFT findings seeded with the statutory criteria of ``case_type``."""
    findings = create_findings_from_template(str(uuid.uuid4()), case_type, meeting_id, agenda_item_id)
    stored = await store.create(tenant, findings)
    audit_logger(tenant, findings_id=stored.id).info(
        f"Created {case_type} findings {stored.id} with {len(stored.criteria)} criteria"
    )
    return stored


async def get_findings(store: EntityStore, tenant: TenantContext, findings_id: str) -> FindingsOfFact:
    return await store.get(tenant, findings_id)


async def set_staff_recommendation(
    store: EntityStore,
    tenant: TenantContext,
    findings_id: str,
    criterion_id: str,
    recommendation: Determination,
    rationale: str | None = None,
) -> FindingsOfFact:
    findings = await store.get(tenant, findings_id)
    return await store.update(
        tenant, update_staff_recommendation(findings, criterion_id, recommendation, rationale)
    )


async def set_board_determination(
    store: EntityStore,
    tenant: TenantContext,
    findings_id: str,
    criterion_id: str,
    determination: Determination,
    rationale: str | None = None,
) -> FindingsOfFact:
    findings = await store.get(tenant, findings_id)
    stored = await store.update(
        tenant, record_board_determination(findings, criterion_id, determination, rationale)
    )
    audit_logger(tenant, findings_id=findings_id).info(
        f"Board determination {determination} recorded on {criterion_id} of findings {findings_id}"
    )
    return stored


async def add_condition_of_approval(
    store: EntityStore,
    tenant: TenantContext,
    findings_id: str,
    condition_text: str,
) -> FindingsOfFact:
    findings = await store.get(tenant, findings_id)
    return await store.update(tenant, add_condition(findings, str(uuid.uuid4()), condition_text))


async def finalize_findings(
    store: EntityStore,
    tenant: TenantContext,
    findings_id: str,
    *,
    approve: bool,
    vote_record_id: str | None = None,
    now: datetime | None = None,
) -> FindingsOfFact:
    """Adopt (``approve=True``) or reject findings and lock them.

    Raises:
        NotFoundError: If the findings do not exist.
        FindingsError: If they are locked, incomplete or do not support the decision.
    """
    findings = await store.get(tenant, findings_id)
    if approve:
        finalized = adopt_findings(findings, vote_record_id, tenant.user_id, now)
    else:
        finalized = reject_findings(findings, vote_record_id, tenant.user_id, now)
    stored = await store.update(tenant, finalized)
    audit_logger(tenant, findings_id=findings_id).info(
        f"Findings {findings_id} {stored.status} (vote {vote_record_id})"
    )
    return stored
