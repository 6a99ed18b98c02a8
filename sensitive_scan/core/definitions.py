# sensitive_scan/core/definitions.py

"""Match type, category and severity constants for sensitive data detection."""

from typing import Dict, List


class MatchType:
    """Constants representing detectable sensitive data types."""

    # PII
    SSN = "ssn"
    PHONE = "phone"
    EMAIL = "email"
    DOD_ID = "dod_id"
    DOB = "dob"
    ADDRESS = "address"

    # Classification markings
    CLASSIFICATION = "classification"

    # CUI
    CUI_MARKING = "cui_marking"
    GRID_COORD = "grid_coord"
    LAT_LONG = "lat_long"
    IP_ADDRESS = "ip_address"
    MAC_ADDRESS = "mac_address"
    MIL_URL = "mil_url"

    @classmethod
    def all(cls) -> List[str]:
        return [
            cls.SSN,
            cls.PHONE,
            cls.EMAIL,
            cls.DOD_ID,
            cls.DOB,
            cls.ADDRESS,
            cls.CLASSIFICATION,
            cls.CUI_MARKING,
            cls.GRID_COORD,
            cls.LAT_LONG,
            cls.IP_ADDRESS,
            cls.MAC_ADDRESS,
            cls.MIL_URL,
        ]


class Category:
    """Closed set of match categories."""

    PII = "PII"
    CLASSIFICATION = "Classification Marking"
    CUI = "CUI"

    # Display order used by summaries
    ORDER = (CLASSIFICATION, CUI, PII)


class Severity:
    """Ordinal severity levels. Used for display ordering only."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    _RANKS: Dict[str, int] = {LOW: 1, MEDIUM: 2, HIGH: 3, CRITICAL: 4}

    @classmethod
    def rank(cls, severity: str) -> int:
        """Returns the ordinal rank of a severity, 0 if unknown."""
        return cls._RANKS.get(severity, 0)

    @classmethod
    def all(cls) -> List[str]:
        return list(cls._RANKS)


class AuditAction:
    """Actions recorded by callers in the sensitive data audit trail."""

    BLOCKED = "blocked"
    REDACTED = "redacted"
    SCAN_CLEAN = "scan_clean"
