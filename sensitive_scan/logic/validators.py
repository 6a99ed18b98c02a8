# sensitive_scan/logic/validators.py

"""Validation strategies that reject implausible pattern candidates."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

logger = logging.getLogger(__name__)


class ValidationLogic:
    """Utility methods for validation algorithms."""

    # Pre-compiled regex patterns for performance
    NON_DIGIT = re.compile(r"[^0-9]")
    SEPARATOR = re.compile(r"[()\-.\s]")
    WORD = re.compile(r"[\w'\-]+")

    @staticmethod
    def digits_only(text: str) -> str:
        """Strips everything but ASCII digits."""
        return ValidationLogic.NON_DIGIT.sub("", text)

    @staticmethod
    def preceding_words(text: str, index: int, count: int, span: int = 40) -> List[str]:
        """Returns up to ``count`` lowercase words ending right before ``index``.

        Args:
            text: Full text containing the match
            index: Match start offset
            count: Maximum number of words to return
            span: Characters inspected before the match

        Returns:
            Words closest to the match last
        """
        before = text[max(0, index - span) : index].lower()
        return ValidationLogic.WORD.findall(before)[-count:]


class ValidatorStrategy(ABC):
    """Base class for candidate validation strategies."""

    def __init__(self, vocabulary: Optional[List[str]] = None):
        self._vocabulary = [v.lower() for v in vocabulary] if vocabulary else []

    @abstractmethod
    def validate(self, match: str, full_text: str, index: int) -> bool:
        """Decides whether a candidate is a real finding.

        Args:
            match: Matched substring
            full_text: Text the candidate was found in
            index: Start offset of the candidate in full_text

        Returns:
            True if the candidate should be reported
        """
        pass

    def vocabulary(self) -> List[str]:
        """Returns the vocabulary this validator was configured with."""
        return self._vocabulary


class SSNValidator(ValidatorStrategy):
    """Rejects SSNs with never-issued area, group or serial numbers."""

    def validate(self, match: str, full_text: str, index: int) -> bool:
        digits = ValidationLogic.digits_only(match)
        if len(digits) != 9:
            return False

        area = int(digits[:3])
        group = int(digits[3:5])
        serial = int(digits[5:])

        if area == 0 or area == 666 or area >= 900:
            return False
        if group == 0 or serial == 0:
            return False
        return True


class PhoneValidator(ValidatorStrategy):
    """Requires a separator or parenthesis so bare 10-digit runs never match."""

    def validate(self, match: str, full_text: str, index: int) -> bool:
        return bool(ValidationLogic.SEPARATOR.search(match))


class SecretMarkingValidator(ValidatorStrategy):
    """Accepts a bare SECRET only when it reads as a marking.

    Vocabulary holds the words that, directly before SECRET, make it an
    idiom ("open secret", "trade secret", "no secret").
    """

    WORD_SUFFIXES = ("ar", "ly", "iv")
    KEEP_VERBS = ("keep", "keeps", "kept", "keeping")
    KEEP_DISTANCE = 3

    def validate(self, match: str, full_text: str, index: int) -> bool:
        # secretary, secretariat, secretly, secretive
        after = full_text[index + len(match) : index + len(match) + 2].lower()
        if after in self.WORD_SUFFIXES:
            return False

        words = ValidationLogic.preceding_words(full_text, index, self.KEEP_DISTANCE)
        if words and words[-1] in self._vocabulary:
            return False

        # keep ... secret
        if any(word in self.KEEP_VERBS for word in words):
            return False

        return True


class GridCoordinateValidator(ValidatorStrategy):
    """Requires enough digits for a grid reference to carry real precision."""

    MIN_DIGITS = 5

    def validate(self, match: str, full_text: str, index: int) -> bool:
        return len(ValidationLogic.digits_only(match)) >= self.MIN_DIGITS


class LatLongValidator(ValidatorStrategy):
    """Rejects decimal-degree pairs outside latitude and longitude range.

    Precision is enforced by the pattern itself.
    """

    COMPONENT = re.compile(r"-?(\d+)\.(\d+)")

    def validate(self, match: str, full_text: str, index: int) -> bool:
        components = self.COMPONENT.findall(match)
        if len(components) != 2:
            return False

        latitude = float(".".join(components[0]))
        longitude = float(".".join(components[1]))
        return latitude <= 90 and longitude <= 180


class IPAddressValidator(ValidatorStrategy):
    """Excludes the allow-listed addresses held in the vocabulary."""

    def validate(self, match: str, full_text: str, index: int) -> bool:
        return match not in self._vocabulary


class MilUrlValidator(ValidatorStrategy):
    """Yields to the email rule when the URL text carries an address."""

    def validate(self, match: str, full_text: str, index: int) -> bool:
        return "@" not in match


VALIDATORS: Dict[str, Type[ValidatorStrategy]] = {
    "ssn": SSNValidator,
    "phone": PhoneValidator,
    "secret_marking": SecretMarkingValidator,
    "grid_coord": GridCoordinateValidator,
    "lat_long": LatLongValidator,
    "ip_address": IPAddressValidator,
    "mil_url": MilUrlValidator,
}

# Cache for validator instances to avoid repeated construction
_validator_cache: Dict[str, ValidatorStrategy] = {}


def get_validator(
    name: str, vocabulary: Optional[List[str]] = None
) -> Optional[ValidatorStrategy]:
    """Factory method to retrieve a validator by registry name.

    Uses caching to reuse validator instances (Flyweight pattern).

    Args:
        name: Validator name as written in patterns.yaml
        vocabulary: Word list the validator is configured with

    Returns:
        ValidatorStrategy instance or None if the name is unknown
    """
    cache_key = f"{name}_{hash(tuple(vocabulary)) if vocabulary else 'None'}"

    if cache_key in _validator_cache:
        return _validator_cache[cache_key]

    validator_class = VALIDATORS.get(name)

    if validator_class:
        instance = validator_class(vocabulary=vocabulary)
        _validator_cache[cache_key] = instance
        return instance

    logger.warning(f"No validator found for name: {name}")
    return None
