# sensitive_scan/service/scanner.py

"""Main scanner service: shared registry and the decision wrappers.

Every function here is a pure composition of matching, deduplication,
redaction and summary. Callers decide what to do with the results
(reject a save, skip an LLM call, write an audit record).
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sensitive_scan.core.domain import (
    FieldRedactionResult,
    LLMScanResult,
    RedactionResult,
    SensitiveMatch,
    WriteCheckResult,
)
from sensitive_scan.core.exceptions import InitializationError, ScannerError
from sensitive_scan.core.loader import PatternLoader
from sensitive_scan.engine.matcher import scan_fields
from sensitive_scan.engine.redactor import Redactor
from sensitive_scan.engine.registry import RuleRegistry, build_registry
from sensitive_scan.service.config import settings
from sensitive_scan.service.summary import get_scan_summary as _render_summary

logger = logging.getLogger(__name__)

# Free-text fields of an accomplishment record, in scan order
RECORD_FIELDS = ("details", "impact", "metrics")

# Field name used when a single string is scanned
STATEMENT_FIELD = "details"


class ScannerService:
    """Process-wide holder of the rule registry and redactor.

    Both are built lazily on first use and never mutated afterwards.
    """

    _loader: Optional[PatternLoader] = None
    _registry: Optional[RuleRegistry] = None
    _redactor: Optional[Redactor] = None
    _lock = threading.Lock()

    @classmethod
    def get_loader(cls) -> PatternLoader:
        """Returns the pattern loader selected by settings.patterns_file."""
        if cls._loader is None:
            with cls._lock:
                if cls._loader is None:
                    if settings.patterns_file:
                        cls._loader = PatternLoader(settings.patterns_file)
                    else:
                        cls._loader = PatternLoader.get_instance()
        return cls._loader

    @classmethod
    def get_registry(cls) -> RuleRegistry:
        """Returns the singleton rule registry.

        Raises:
            InitializationError: If the registry cannot be built
        """
        if cls._registry is None:
            loader = cls.get_loader()
            with cls._lock:
                # Double-checked locking pattern
                if cls._registry is None:
                    try:
                        logger.info("Initializing rule registry")
                        cls._registry = build_registry(
                            loader, enabled_types=settings.enabled_types
                        )
                        logger.info("Rule registry initialized successfully")

                    except Exception as e:
                        logger.error("Failed to initialize rule registry", exc_info=True)
                        if isinstance(e, ScannerError):
                            raise
                        raise InitializationError(
                            "Rule registry initialization failed"
                        ) from e

        return cls._registry

    @classmethod
    def get_redactor(cls) -> Redactor:
        """Returns the singleton redactor."""
        if cls._redactor is None:
            with cls._lock:
                if cls._redactor is None:
                    try:
                        cls._redactor = Redactor()
                    except Exception as e:
                        logger.error("Failed to initialize redactor", exc_info=True)
                        raise InitializationError(
                            "Redactor initialization failed"
                        ) from e
        return cls._redactor


def _record_fields(item: Any) -> Dict[str, Optional[str]]:
    """Extracts the free-text fields of a mapping or attribute-style record."""
    if isinstance(item, Mapping):
        return {name: item.get(name) for name in RECORD_FIELDS}
    return {name: getattr(item, name, None) for name in RECORD_FIELDS}


def scan_for_sensitive_data(fields: Mapping[str, Optional[str]]) -> List[SensitiveMatch]:
    """Scans named text fields; an empty list means clean."""
    return scan_fields(ScannerService.get_registry(), fields)


def has_sensitive_data(fields: Mapping[str, Optional[str]]) -> bool:
    """Quick boolean check, true iff any field has a match."""
    return len(scan_for_sensitive_data(fields)) > 0


def scan_statement_text(text: Optional[str]) -> List[SensitiveMatch]:
    """Scans a single statement before saving it."""
    return scan_for_sensitive_data({STATEMENT_FIELD: text})


def scan_accomplishments_for_llm(items: Iterable[Any]) -> LLMScanResult:
    """Scans accomplishment-like records before sending them to an LLM.

    Args:
        items: Mappings or objects with optional details, impact, metrics

    Returns:
        LLMScanResult, blocked when any record has a match
    """
    all_matches: List[SensitiveMatch] = []
    for item in items:
        all_matches.extend(scan_for_sensitive_data(_record_fields(item)))
    return LLMScanResult(blocked=len(all_matches) > 0, matches=all_matches)


def scan_text_for_llm(*texts: Optional[str]) -> LLMScanResult:
    """Scans free-text context strings sent directly to LLM providers.

    None and blank entries are ignored.
    """
    all_matches: List[SensitiveMatch] = []
    for text in texts:
        all_matches.extend(scan_statement_text(text))
    return LLMScanResult(blocked=len(all_matches) > 0, matches=all_matches)


def redact_sensitive_data(text: str, matches: Iterable[SensitiveMatch]) -> str:
    """Replaces every match span with a typed [REDACTED-<TYPE>] token.

    Example: "SSN 123-45-6789" -> "SSN [REDACTED-SSN]"
    """
    matches = list(matches)
    if not matches:
        return text
    return ScannerService.get_redactor().redact(text, matches)


def redact_field(text: str, field_name: str) -> RedactionResult:
    """Scans a single field and redacts it in one step."""
    matches = [
        m for m in scan_for_sensitive_data({field_name: text}) if m.field == field_name
    ]
    return RedactionResult(
        redacted=redact_sensitive_data(text, matches),
        matches=matches,
    )


def redact_fields(fields: Mapping[str, Optional[str]]) -> FieldRedactionResult:
    """Scans a record's fields and redacts each with its own matches.

    Used for post-save auto-redaction of records that slipped through.
    """
    matches = scan_for_sensitive_data(fields)
    result = FieldRedactionResult(fields=dict(fields), matches=matches)

    for field_name, text in fields.items():
        field_matches = [m for m in matches if m.field == field_name]
        if not field_matches or not text:
            continue
        result.fields[field_name] = redact_sensitive_data(text, field_matches)
        result.redacted_fields.append(field_name)

    return result


def get_scan_summary(matches: List[SensitiveMatch]) -> str:
    """Produces a human-readable summary for toast / error messages."""
    return _render_summary(matches, loader=ScannerService.get_loader())


def check_write(fields: Mapping[str, Optional[str]]) -> WriteCheckResult:
    """Pre-save check: blocked with a summary when any field has a match."""
    matches = scan_for_sensitive_data(fields)
    if matches:
        return WriteCheckResult(
            blocked=True, matches=matches, error=get_scan_summary(matches)
        )
    return WriteCheckResult(blocked=False)
