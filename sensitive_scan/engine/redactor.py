# sensitive_scan/engine/redactor.py

"""Presidio-based redaction of matched spans with typed placeholder tokens."""

import logging
from typing import Dict, Iterable, List

from presidio_anonymizer import AnonymizerEngine
from presidio_anonymizer.entities import OperatorConfig, RecognizerResult

from sensitive_scan.core.domain import SensitiveMatch
from sensitive_scan.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def redaction_token(match_type: str) -> str:
    """Returns the placeholder for a match type, e.g. [REDACTED-SSN]."""
    return f"[REDACTED-{match_type.upper()}]"


def select_spans(text: str, matches: Iterable[SensitiveMatch]) -> List[SensitiveMatch]:
    """Keeps the matches that can be replaced in ``text`` without clashing.

    Matches whose value is not at their index (another field's matches)
    are dropped. Overlaps keep the earliest span, then the longest.
    """
    candidates = [
        m
        for m in matches
        if m.value and text[m.index : m.end] == m.value
    ]
    candidates.sort(key=lambda m: (m.index, -len(m.value)))

    selected: List[SensitiveMatch] = []
    covered_until = -1
    for m in candidates:
        if m.index < covered_until:
            continue
        selected.append(m)
        covered_until = m.end
    return selected


class Redactor:
    """Wraps the Presidio anonymizer with one replace operator per type.

    The anonymizer applies replacements from the end of the text, so the
    offsets of earlier matches stay valid.
    """

    def __init__(self) -> None:
        self._anonymizer = AnonymizerEngine()

    def redact(self, text: str, matches: Iterable[SensitiveMatch]) -> str:
        """Replaces every match span in text with its typed token.

        Args:
            text: Original field text the matches were found in
            matches: Matches for this text

        Returns:
            Redacted text, or text itself when nothing applies

        Raises:
            ValidationError: If text is not a str
        """
        if not isinstance(text, str):
            raise ValidationError(f"Expected text as str, got {type(text).__name__}")

        spans = select_spans(text, matches)
        if not spans:
            return text

        operators: Dict[str, OperatorConfig] = {
            m.type: OperatorConfig("replace", {"new_value": redaction_token(m.type)})
            for m in spans
        }

        analyzer_results = [
            RecognizerResult(
                entity_type=m.type,
                start=m.index,
                end=m.end,
                score=1.0,
            )
            for m in spans
        ]

        anonymized = self._anonymizer.anonymize(
            text=text,
            analyzer_results=analyzer_results,
            operators=operators,
        )

        logger.debug(
            "Redaction completed",
            extra={
                "span_count": len(spans),
                "text_length": len(text),
                "entity_types": sorted(operators),
            },
        )
        return anonymized.text
