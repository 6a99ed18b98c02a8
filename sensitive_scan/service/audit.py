# sensitive_scan/service/audit.py

"""Audit event payloads for callers that record scan decisions.

The scanner never writes audit records itself; callers hand these
payloads to their own audit sink.
"""

from typing import Any, Dict, Optional, Sequence

from sensitive_scan.core.definitions import AuditAction
from sensitive_scan.core.domain import SensitiveMatch

_ACTIONS = (AuditAction.BLOCKED, AuditAction.REDACTED, AuditAction.SCAN_CLEAN)


def build_audit_event(
    action: str,
    matches: Sequence[SensitiveMatch],
    user_id: str,
    record_id: Optional[str] = None,
    original_snippets: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Builds the audit payload for a scan decision.

    Args:
        action: One of AuditAction.BLOCKED, REDACTED or SCAN_CLEAN
        matches: Matches behind the decision; only metadata is kept
        user_id: User whose text was scanned
        record_id: Record the text belongs to, None for blocked new records
        original_snippets: Pre-redaction field texts kept for incident response

    Returns:
        Payload with match metadata and no matched values

    Raises:
        ValueError: If action is not a known audit action
    """
    if action not in _ACTIONS:
        raise ValueError(f"Unknown audit action: {action}")

    return {
        "action": action,
        "matches": [m.to_audit_dict() for m in matches] if matches else None,
        "user_id": user_id,
        "record_id": record_id,
        "original_snippets": original_snippets or None,
    }
