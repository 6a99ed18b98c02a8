# sensitive_scan/core/loader.py

"""Configuration and pattern loader for the detection rule registry."""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from sensitive_scan.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS_PATH = Path(__file__).parent / "patterns.yaml"


class PatternLoader:
    """Loader for detection rules, vocabulary, and summary text.

    The packaged patterns.yaml is loaded once and shared through
    get_instance(). A loader for another file can be built directly,
    which is how tests and the patterns_file setting use it.
    """

    _instance: Optional["PatternLoader"] = None
    _lock = threading.Lock()

    REQUIRED_SECTIONS = ("rules", "vocabulary", "summary")

    def __init__(self, config_path: Union[str, Path, None] = None) -> None:
        self.config_path = Path(config_path) if config_path else DEFAULT_PATTERNS_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Loads and validates the pattern file.

        Raises:
            ConfigurationError: If file is missing, invalid, or empty.
        """
        try:
            if not self.config_path.exists():
                error_msg = f"Pattern file not found: {self.config_path}"
                logger.error(error_msg)
                raise ConfigurationError(error_msg)

            with open(self.config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f)

            if not self._config or not isinstance(self._config, dict):
                raise ConfigurationError("Pattern file is empty or invalid")

            self._validate_config()

            logger.info(
                "Pattern configuration loaded",
                extra={
                    "config_path": str(self.config_path),
                    "rule_count": len(self._config.get("rules", [])),
                    "vocab_count": len(self._config.get("vocabulary", {})),
                },
            )

        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}", exc_info=True)
            raise ConfigurationError(
                f"Failed to parse {self.config_path.name}: {e}"
            ) from e
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Pattern loading failed: {e}", exc_info=True)
            raise ConfigurationError(f"Failed to load patterns: {e}") from e

    def _validate_config(self) -> None:
        """Validates required sections and the shape of every rule entry.

        Raises:
            ConfigurationError: If sections or rule keys are missing.
        """
        missing = [s for s in self.REQUIRED_SECTIONS if s not in self._config]
        if missing:
            error_msg = f"Missing required configuration sections: {missing}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg)

        rules = self._config["rules"]
        if not isinstance(rules, list):
            raise ConfigurationError("'rules' must be a list")

        required_keys = ("type", "category", "severity", "label", "patterns")
        for position, rule in enumerate(rules):
            if not isinstance(rule, dict):
                raise ConfigurationError(f"Rule #{position} is not a mapping")
            absent = [k for k in required_keys if k not in rule]
            if absent:
                raise ConfigurationError(
                    f"Rule #{position} ({rule.get('type', '?')}) is missing {absent}"
                )
            if not rule["patterns"]:
                raise ConfigurationError(f"Rule '{rule['type']}' has no patterns")
            for pattern in rule["patterns"]:
                if "name" not in pattern or "regex" not in pattern:
                    raise ConfigurationError(
                        f"Rule '{rule['type']}' has a pattern without name or regex"
                    )

    @classmethod
    def get_instance(cls) -> "PatternLoader":
        """Returns the shared loader for the packaged patterns.yaml."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def get_rules(self) -> List[Dict[str, Any]]:
        """Returns rule definitions in declaration order."""
        return list(self._config.get("rules", []))

    def get_vocabulary(self, category: str) -> List[str]:
        """Retrieves vocabulary list by category name.

        Args:
            category: Vocabulary category (e.g., 'ip_allowlist')

        Returns:
            List of vocabulary terms, empty list if category not found
        """
        vocab = self._config.get("vocabulary", {}).get(category, [])
        return [str(term) for term in vocab] if vocab else []

    def get_summary_config(self) -> Dict[str, Any]:
        """Returns the summary header, notice and category headings."""
        return dict(self._config.get("summary", {}))
