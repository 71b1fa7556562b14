"""Statutory criteria templates for variance findings."""

from dataclasses import dataclass

from meeting_compliance.lib.findings.types import FindingsCaseType, FindingsCriterion, FindingsOfFact

_NOT_INJURIOUS = "Not injurious to public health, safety, morals, and general welfare"
_ADJACENT_AREA = "Use and value of adjacent area will not be substantially adversely affected"


@dataclass(frozen=True)
class FindingsTemplate:
    case_type: FindingsCaseType
    statutory_cite: str
    short_title: str
    criteria: tuple[str, ...]


FINDINGS_TEMPLATES: dict[FindingsCaseType, FindingsTemplate] = {
    FindingsCaseType.DEVELOPMENT_VARIANCE: FindingsTemplate(
        FindingsCaseType.DEVELOPMENT_VARIANCE,
        "IC 36-7-4-918.5",
        "Development Standards Variance",
        (
            _NOT_INJURIOUS,
            _ADJACENT_AREA,
            "Strict application results in practical difficulties in use of property",
        ),
    ),
    FindingsCaseType.USE_VARIANCE: FindingsTemplate(
        FindingsCaseType.USE_VARIANCE,
        "IC 36-7-4-918.4",
        "Use Variance",
        (
            _NOT_INJURIOUS,
            _ADJACENT_AREA,
            "Need arises from condition peculiar to property",
            "Strict application results in unnecessary hardship",
            "Will not interfere with or adversely affect comprehensive plan",
        ),
    ),
}


def get_template(case_type: FindingsCaseType) -> FindingsTemplate:
    """Return the statutory template for ``case_type``.

    Raises:
        ValueError: If no template exists for the case type.
    """
    template = FINDINGS_TEMPLATES.get(case_type)
    if template is None:
        msg = f"No findings template for case type: {case_type}"
        raise ValueError(msg)
    return template


def create_findings_from_template(
    findings_id: str,
    case_type: FindingsCaseType,
    meeting_id: str | None = None,
    agenda_item_id: str | None = None,
) -> FindingsOfFact:
    """New DRAFT findings with every statutory criterion of the case type, all required."""
    template = get_template(case_type)
    criteria = tuple(
        FindingsCriterion(
            id=f"{findings_id}-c{number}",
            criterion_number=number,
            criterion_text=text,
            statutory_cite=template.statutory_cite,
        )
        for number, text in enumerate(template.criteria, start=1)
    )
    return FindingsOfFact(
        id=findings_id,
        case_type=case_type,
        statutory_cite=template.statutory_cite,
        criteria=criteria,
        meeting_id=meeting_id,
        agenda_item_id=agenda_item_id,
    )
