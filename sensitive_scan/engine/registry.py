# sensitive_scan/engine/registry.py

"""Builds the immutable rule registry from the declarative pattern file."""

import logging
import re
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple

from sensitive_scan.core.definitions import Category, Severity
from sensitive_scan.core.domain import ContextRequirement, DetectionRule, RulePattern
from sensitive_scan.core.exceptions import ConfigurationError, InitializationError
from sensitive_scan.core.loader import PatternLoader
from sensitive_scan.engine.recognizers import RuleRecognizer
from sensitive_scan.logic.validators import get_validator

logger = logging.getLogger(__name__)

BASE_FLAGS = re.ASCII


class RuleRegistry:
    """Ordered, read-only collection of detection rules and their recognizers.

    Built once per process by ScannerService; tests build their own from
    hand-written rules.
    """

    def __init__(self, rules: Iterable[DetectionRule]) -> None:
        self._rules: Tuple[DetectionRule, ...] = tuple(rules)
        self._validate_rules()
        self._recognizers: Tuple[RuleRecognizer, ...] = tuple(
            RuleRecognizer(rule) for rule in self._rules
        )

    def _validate_rules(self) -> None:
        """Enforces unique types and the closed category set.

        Raises:
            ConfigurationError: If a rule breaks a registry invariant.
        """
        seen = set()
        for rule in self._rules:
            if rule.type in seen:
                raise ConfigurationError(f"Duplicate rule type: {rule.type}")
            seen.add(rule.type)

            if rule.category not in Category.ORDER:
                raise ConfigurationError(
                    f"Rule '{rule.type}' has unknown category: {rule.category}"
                )
            if rule.severity not in Severity.all():
                raise ConfigurationError(
                    f"Rule '{rule.type}' has unknown severity: {rule.severity}"
                )

    @property
    def rules(self) -> Tuple[DetectionRule, ...]:
        return self._rules

    @property
    def recognizers(self) -> Tuple[RuleRecognizer, ...]:
        return self._recognizers

    @property
    def types(self) -> Tuple[str, ...]:
        return tuple(rule.type for rule in self._rules)

    def get(self, rule_type: str) -> Optional[DetectionRule]:
        """Returns the rule for a match type, None if not registered."""
        for rule in self._rules:
            if rule.type == rule_type:
                return rule
        return None

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[DetectionRule]:
        return iter(self._rules)

    def __repr__(self):
        return f"<RuleRegistry rules={len(self._rules)}>"


def _compile_pattern(
    rule_type: str, definition: Dict[str, Any], loader: PatternLoader
) -> RulePattern:
    """Compiles one pattern entry and resolves its validator and context.

    Raises:
        InitializationError: If the regex is invalid or the validator unknown.
    """
    flags = BASE_FLAGS
    if definition.get("ignore_case", False):
        flags |= re.IGNORECASE

    try:
        regex = re.compile(definition["regex"], flags)
    except re.error as e:
        raise InitializationError(
            f"Invalid regex for {rule_type}/{definition['name']}: {e}"
        ) from e

    validator = None
    validator_name = definition.get("validator")
    if validator_name:
        vocabulary_name = definition.get("vocabulary")
        vocabulary = loader.get_vocabulary(vocabulary_name) if vocabulary_name else None
        strategy = get_validator(validator_name, vocabulary)
        if strategy is None:
            raise InitializationError(
                f"Unknown validator '{validator_name}' for {rule_type}/{definition['name']}"
            )
        validator = strategy.validate

    context = None
    context_def = definition.get("context")
    if context_def:
        context = ContextRequirement(
            keywords=tuple(str(k).lower() for k in context_def.get("keywords", [])),
            before=int(context_def.get("before", 40)),
            after=int(context_def.get("after", 40)),
        )

    return RulePattern(
        name=definition["name"],
        regex=regex,
        validator=validator,
        context=context,
    )


def build_rules(
    loader: PatternLoader, enabled_types: Optional[Sequence[str]] = None
) -> Tuple[DetectionRule, ...]:
    """Creates DetectionRule records from the loader's rule definitions.

    Args:
        loader: Source of rule definitions and vocabulary
        enabled_types: Types to keep; every rule when None

    Returns:
        Rules in declaration order
    """
    rules = []
    for definition in loader.get_rules():
        rule_type = definition["type"]
        if enabled_types is not None and rule_type not in enabled_types:
            logger.info(f"Skipping disabled rule: {rule_type}")
            continue

        patterns = tuple(
            _compile_pattern(rule_type, p, loader) for p in definition["patterns"]
        )
        rules.append(
            DetectionRule(
                type=rule_type,
                category=definition["category"],
                severity=definition["severity"],
                label=definition["label"],
                patterns=patterns,
            )
        )
    return tuple(rules)


def build_registry(
    loader: Optional[PatternLoader] = None,
    enabled_types: Optional[Sequence[str]] = None,
) -> RuleRegistry:
    """Builds a RuleRegistry from a loader (the packaged one by default)."""
    loader = loader or PatternLoader.get_instance()
    registry = RuleRegistry(build_rules(loader, enabled_types))

    logger.info(
        f"Initialized {len(registry)} detection rules",
        extra={"rule_types": list(registry.types)},
    )
    return registry
