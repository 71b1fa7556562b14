"""Publication rule registry.

A ``PublicationRuleRegistry`` is an immutable mapping from notice reason to
statutory rule. Registries are built explicitly and passed to the deadline
calculator; tenant overrides produce a new registry through ``with_rule``.
"""

from collections.abc import Iterable, Iterator
from types import MappingProxyType

from meeting_compliance.lib.meetings.errors import RuleNotFoundError
from meeting_compliance.lib.publication.types import NoticeChannel, NoticeReason, PublicationRule

INDIANA_PUBLICATION_RULES: tuple[PublicationRule, ...] = (
    PublicationRule(
        NoticeReason.OPEN_DOOR_MEETING,
        required_publications=0,
        required_lead_days=2,
        required_channels=(NoticeChannel.PHYSICAL_POSTING, NoticeChannel.WEBSITE),
        statutory_cite="IC 5-14-1.5-5",
        description="Open Door Law meeting notice; posted 48 hours ahead, no newspaper publication",
    ),
    PublicationRule(
        NoticeReason.GENERAL_PUBLIC_HEARING,
        required_publications=1,
        required_lead_days=10,
        statutory_cite="IC 5-3-1-2",
        description="Public hearing notice published once at least 10 days before the hearing",
    ),
    PublicationRule(
        NoticeReason.ZONING_MAP_AMENDMENT,
        required_publications=1,
        required_lead_days=10,
        statutory_cite="IC 36-7-4-604",
        description="Zoning map amendment hearing notice",
    ),
    PublicationRule(
        NoticeReason.VARIANCE_HEARING,
        required_publications=1,
        required_lead_days=10,
        statutory_cite="IC 36-7-4-920",
        description="Board of zoning appeals variance hearing notice",
    ),
    PublicationRule(
        NoticeReason.BOND_HEARING,
        required_publications=2,
        required_lead_days=10,
        must_be_consecutive=True,
        statutory_cite="IC 6-1.1-20-3.1",
        description="Bond issue hearing; two publications in consecutive weeks",
    ),
    PublicationRule(
        NoticeReason.BUDGET_HEARING,
        required_publications=2,
        required_lead_days=10,
        statutory_cite="IC 6-1.1-17-3",
        description="Annual budget hearing notice",
    ),
    PublicationRule(
        NoticeReason.ANNEXATION_HEARING,
        required_publications=1,
        required_lead_days=20,
        statutory_cite="IC 36-4-3-2.1",
        description="Annexation hearing; notice at least 20 days before the hearing",
    ),
    PublicationRule(
        NoticeReason.TAX_ABATEMENT_HEARING,
        required_publications=1,
        required_lead_days=10,
        statutory_cite="IC 6-1.1-12.1-2.5",
        description="Tax abatement (economic revitalization area) hearing notice",
    ),
    PublicationRule(
        NoticeReason.ECONOMIC_DEVELOPMENT_HEARING,
        required_publications=1,
        required_lead_days=10,
        statutory_cite="IC 36-7-12-24",
        description="Economic development commission hearing notice",
    ),
)


class PublicationRuleRegistry:
    """Read-only lookup of publication rules by notice reason.

    Args:
        rules: Rules to register. A later rule for the same reason replaces
            an earlier one.
    """

    def __init__(self, rules: Iterable[PublicationRule] = ()) -> None:
        self._rules = MappingProxyType({rule.notice_reason: rule for rule in rules})

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[PublicationRule]:
        return iter(self._rules.values())

    def __contains__(self, reason: object) -> bool:
        return reason in self._rules

    def find(self, reason: NoticeReason | str) -> PublicationRule | None:
        """Return the rule for ``reason``, or ``None``."""
        try:
            return self._rules.get(NoticeReason(reason))
        except ValueError:
            return None

    def get(self, reason: NoticeReason | str) -> PublicationRule:
        """Return the rule for ``reason``.

        Raises:
            RuleNotFoundError: If no rule is registered for the reason.
        """
        rule = self.find(reason)
        if rule is None:
            raise RuleNotFoundError(str(reason))
        return rule

    def with_rule(self, rule: PublicationRule) -> "PublicationRuleRegistry":
        """Return a new registry with ``rule`` added or replacing the existing one."""
        return PublicationRuleRegistry([*self._rules.values(), rule])

    def without(self, reason: NoticeReason) -> "PublicationRuleRegistry":
        return PublicationRuleRegistry(r for r in self._rules.values() if r.notice_reason != reason)


def default_indiana_rules() -> PublicationRuleRegistry:
    """Registry seeded with the Indiana statutory publication rules."""
    return PublicationRuleRegistry(INDIANA_PUBLICATION_RULES)
