"""
AdmitGuard Rule Catalog

The ordered, read-only set of admission rules. A catalog is built once from
the admission pack at startup and never mutated afterwards.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Optional

from ..exceptions import MissingRuleError
from ..models import Rule, RuleSeverity


class RuleCatalog:
    """
    Immutable, ordered collection of rules keyed by field id.

    Usage:
        catalog = RuleCatalog(rules)
        rule = catalog.get("email")
        for rule in catalog:
            ...
    """

    __slots__ = ("_rules", "_index")

    def __init__(self, rules: Iterable[Rule]):
        ordered = tuple(rules)
        index: dict[str, Rule] = {}
        for rule in ordered:
            if rule.field_id in index:
                raise ValueError(f"Duplicate rule for field '{rule.field_id}'")
            index[rule.field_id] = rule
        self._rules = ordered
        self._index = index

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._index

    def __repr__(self) -> str:
        return f"RuleCatalog({list(self._index)})"

    def get(self, field_id: str) -> Rule:
        """
        Look up the rule for a field.

        Raises:
            MissingRuleError: No rule guards this field
        """
        rule = self._index.get(field_id)
        if rule is None:
            raise MissingRuleError(
                message=f"No rule for field '{field_id}'",
                details={"field": field_id, "known_fields": list(self._index)},
            )
        return rule

    def find(self, field_id: str) -> Optional[Rule]:
        """Look up a rule, returning None when absent."""
        return self._index.get(field_id)

    def field_ids(self) -> list[str]:
        return [rule.field_id for rule in self._rules]

    def strict_fields(self) -> list[str]:
        return [r.field_id for r in self._rules if r.severity == RuleSeverity.STRICT]

    def soft_fields(self) -> list[str]:
        return [r.field_id for r in self._rules if r.severity == RuleSeverity.SOFT]

    def is_soft(self, field_id: str) -> bool:
        return self.get(field_id).is_soft

    def describe(self) -> list[dict[str, Any]]:
        """JSON-safe listing of every rule, in catalog order."""
        return [rule.to_dict() for rule in self._rules]
