# sensitive_scan/engine/matcher.py

"""Matcher engine, multi-field scanner and match deduplication."""

from typing import Iterable, List, Mapping, Optional, Set, Tuple

from sensitive_scan.core.domain import SensitiveMatch
from sensitive_scan.core.exceptions import ValidationError
from sensitive_scan.engine.registry import RuleRegistry


def _is_blank(text: Optional[str]) -> bool:
    if text is None:
        return True
    if not isinstance(text, str):
        raise ValidationError(f"Expected text as str, got {type(text).__name__}")
    return not text.strip()


def match(
    registry: RuleRegistry, text: Optional[str], field: Optional[str] = None
) -> List[SensitiveMatch]:
    """Applies every registry rule to one text.

    Args:
        registry: Rules to apply, in order
        text: Text to inspect; None, empty and whitespace-only yield []
        field: Field name stamped on every match

    Returns:
        Matches in rule order, then offset order

    Raises:
        ValidationError: If text is neither None nor a str
    """
    if _is_blank(text):
        return []

    matches = []
    for recognizer in registry.recognizers:
        rule = recognizer.rule
        for result in recognizer.analyze(text):
            matches.append(
                SensitiveMatch(
                    type=rule.type,
                    category=rule.category,
                    label=rule.label,
                    severity=rule.severity,
                    value=text[result.start : result.end],
                    index=result.start,
                    field=field,
                )
            )
    return matches


def deduplicate_matches(matches: Iterable[SensitiveMatch]) -> List[SensitiveMatch]:
    """Drops matches whose (type, index, field) was already seen.

    Distinct occurrences at different offsets are kept.
    """
    seen: Set[Tuple[str, int, Optional[str]]] = set()
    unique = []
    for m in matches:
        key = (m.type, m.index, m.field)
        if key in seen:
            continue
        seen.add(key)
        unique.append(m)
    return unique


def scan_fields(
    registry: RuleRegistry, fields: Mapping[str, Optional[str]]
) -> List[SensitiveMatch]:
    """Scans each present field independently and tags matches with its name.

    Context keywords in one field never satisfy a rule in another.
    """
    matches: List[SensitiveMatch] = []
    for field_name, text in fields.items():
        matches.extend(match(registry, text, field=field_name))
    return deduplicate_matches(matches)
