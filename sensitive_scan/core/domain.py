# sensitive_scan/core/domain.py

"""Domain models for detection rules, scan matches and scan results."""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple

# (matched_text, full_text, match_index) -> accept?
ValidatorFn = Callable[[str, str, int], bool]


@dataclass(frozen=True)
class ContextRequirement:
    """Keywords that must appear in a bounded window around a candidate.

    Keywords are matched case-insensitively from a word boundary, so
    "dob" is found in "DOB:" but not inside "Adobe". Whitespace inside a
    keyword matches any run of whitespace.

    Attributes:
        keywords: Lowercase keywords
        before: Characters inspected before the match start
        after: Characters inspected after the match end
    """

    keywords: Tuple[str, ...]
    before: int = 40
    after: int = 40
    _pattern: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        alternatives = "|".join(
            r"\s+".join(re.escape(part) for part in keyword.split())
            for keyword in self.keywords
        )
        object.__setattr__(
            self,
            "_pattern",
            re.compile(rf"\b(?:{alternatives})", re.IGNORECASE | re.ASCII),
        )

    def is_satisfied(self, text: str, start: int, end: int) -> bool:
        """Checks the window around ``text[start:end]`` for any keyword."""
        if not self.keywords:
            return False
        # Searching the full text keeps \b aware of the character before the window
        lo = max(0, start - self.before)
        return self._pattern.search(text, lo, end + self.after) is not None


@dataclass(frozen=True)
class RulePattern:
    """One structural alternative of a detection rule.

    Attributes:
        name: Pattern name, unique within its rule
        regex: Compiled expression producing candidate spans
        validator: Optional predicate rejecting implausible candidates
        context: Optional keyword window required before accepting
    """

    name: str
    regex: Pattern[str]
    validator: Optional[ValidatorFn] = None
    context: Optional[ContextRequirement] = None


@dataclass(frozen=True)
class DetectionRule:
    """A registry entry describing one kind of sensitive data.

    Attributes:
        type: Globally unique match type (e.g., ssn, phone)
        category: PII, Classification Marking or CUI
        severity: Display ordinal (low, medium, high, critical)
        label: Human-readable name used in summaries
        patterns: Structural alternatives tried in order
    """

    type: str
    category: str
    severity: str
    label: str
    patterns: Tuple[RulePattern, ...]


@dataclass(frozen=True)
class SensitiveMatch:
    """A single detected span of sensitive data.

    Attributes:
        type: Match type copied from the rule
        category: Category copied from the rule
        label: Label copied from the rule
        severity: Severity copied from the rule
        value: Exact matched substring
        index: Start offset within the source field's text
        field: Source field name, None when a bare string was matched
    """

    type: str
    category: str
    label: str
    severity: str
    value: str
    index: int
    field: Optional[str] = None

    @property
    def end(self) -> int:
        return self.index + len(self.value)

    def to_audit_dict(self) -> Dict[str, Any]:
        """Returns match metadata safe to log (never the raw value)."""
        return {
            "type": self.type,
            "category": self.category,
            "severity": self.severity,
            "label": self.label,
            "field": self.field,
        }


@dataclass(frozen=True)
class LLMScanResult:
    """Outcome of a pre-transmission scan of text bound for an LLM provider."""

    blocked: bool
    matches: List[SensitiveMatch] = field(default_factory=list)

    @property
    def labels(self) -> List[str]:
        """Distinct match labels in first-seen order."""
        return list(dict.fromkeys(m.label for m in self.matches))

    def error_message(self) -> str:
        """Message returned to the UI when the outbound call is skipped."""
        if not self.blocked:
            return ""
        return (
            f"Sensitive data detected ({', '.join(self.labels)}). "
            "Please remove it before sending to an AI provider."
        )


@dataclass
class RedactionResult:
    """Result of scanning and redacting a single field.

    Attributes:
        redacted: Text with every match replaced by a typed token
        matches: Matches used for the redaction
    """

    redacted: str
    matches: List[SensitiveMatch] = field(default_factory=list)


@dataclass
class FieldRedactionResult:
    """Result of scanning and redacting a set of named fields.

    Attributes:
        fields: Field texts after redaction (unchanged fields included)
        matches: All matches found across the fields
        redacted_fields: Names of the fields that were changed
    """

    fields: Dict[str, Optional[str]] = field(default_factory=dict)
    matches: List[SensitiveMatch] = field(default_factory=list)
    redacted_fields: List[str] = field(default_factory=list)


@dataclass
class WriteCheckResult:
    """Outcome of the pre-save check run before persisting a record."""

    blocked: bool
    matches: List[SensitiveMatch] = field(default_factory=list)
    error: Optional[str] = None
