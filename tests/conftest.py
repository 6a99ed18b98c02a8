from __future__ import annotations

from pathlib import Path

import pytest

from sensitive_scan.engine.registry import RuleRegistry
from sensitive_scan.service.scanner import ScannerService, scan_for_sensitive_data


@pytest.fixture(scope="session")
def registry() -> RuleRegistry:
    return ScannerService.get_registry()


@pytest.fixture
def scan():
    """Scans a single string as the 'details' field."""

    def _scan(text):
        return scan_for_sensitive_data({"details": text})

    return _scan


@pytest.fixture
def types_in(scan):
    """Returns the set of match types found in a string."""

    def _types_in(text):
        return {m.type for m in scan(text)}

    return _types_in


@pytest.fixture
def write_patterns(tmp_path: Path):
    """Writes a patterns file and returns its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "patterns.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
