"""Matching rules and record fingerprints for deduplication.

A fingerprint concatenates the values of each rule's matched fields, in
the order the rules were supplied, joined by a fixed separator. Two
records with the same fingerprint describe the same entity.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from core.constants import FINGERPRINT_SEPARATOR
from core.errors import HarmoniaRuleError
from core.values import Record, is_sequence, stringify_value


@dataclass(frozen=True)
class MatchingRule:
    """Identity declaration for one logical entity.

    Attributes:
        entity: Logical entity name the rule was declared under.
        fields: Ordered field keys whose values form the identity.
    """

    entity: str
    fields: tuple[str, ...]


def parse_matching_rule(entity: str, raw_rule: object, strict: bool = False) -> MatchingRule:
    """Parse one plain matching rule.

    A ``{fields: [...]}`` mapping is a composite match. Any scalar rule
    value matches on the field named like the entity itself.

    Args:
        entity: Rule key (logical entity name).
        raw_rule: Rule value.
        strict: Reject mappings without a usable ``fields`` list.

    Returns:
        Typed matching rule.

    Raises:
        HarmoniaRuleError: If ``strict`` and the rule is malformed.
    """
    if isinstance(raw_rule, MatchingRule):
        return raw_rule
    if not isinstance(raw_rule, Mapping):
        return MatchingRule(entity=entity, fields=(entity,))
    raw_fields = raw_rule.get("fields")
    if is_sequence(raw_fields) and all(isinstance(name, str) for name in raw_fields):
        if raw_fields or not strict:
            return MatchingRule(entity=entity, fields=tuple(raw_fields))
    if strict:
        raise HarmoniaRuleError(
            f"Invalid matching rule '{entity}': expected {{fields: [<field>, ...]}} "
            "with a non-empty list of field names."
        )
    return MatchingRule(entity=entity, fields=())


def parse_matching_rules(
    raw_rules: Mapping[str, object] | Iterable[MatchingRule],
    strict: bool = False,
) -> tuple[MatchingRule, ...]:
    """Parse matching rules, preserving the order they were supplied."""
    if isinstance(raw_rules, Mapping):
        return tuple(
            parse_matching_rule(str(entity), raw_rule, strict)
            for entity, raw_rule in raw_rules.items()
        )
    parsed_rules = tuple(raw_rules)
    for rule in parsed_rules:
        if not isinstance(rule, MatchingRule):
            raise HarmoniaRuleError(
                f"Matching rules must be a mapping or MatchingRule objects, got {rule!r}."
            )
    return parsed_rules


def build_fingerprint(record: Record, rules: Sequence[MatchingRule]) -> str:
    """Build the deduplication fingerprint for a mapping record.

    Fields absent from the record are skipped.

    Args:
        record: Mapping record.
        rules: Ordered matching rules.

    Returns:
        Deterministic fingerprint string.
    """
    parts: list[str] = []
    for rule in rules:
        for field_name in rule.fields:
            if field_name in record:
                parts.append(stringify_value(record[field_name]))
    return FINGERPRINT_SEPARATOR.join(parts)
