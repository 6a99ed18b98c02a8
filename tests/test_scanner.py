from __future__ import annotations

from types import SimpleNamespace

import pytest

from sensitive_scan.core.definitions import AuditAction
from sensitive_scan.core.domain import LLMScanResult, SensitiveMatch
from sensitive_scan.service.audit import build_audit_event
from sensitive_scan.service.scanner import (
    check_write,
    get_scan_summary,
    has_sensitive_data,
    redact_fields,
    scan_accomplishments_for_llm,
    scan_statement_text,
    scan_text_for_llm,
)


def _m(match_type, category, label, severity, value="x", index=0, field="details"):
    return SensitiveMatch(match_type, category, label, severity, value, index, field)


def test_has_sensitive_data():
    assert has_sensitive_data({"details": "Email me at a@b.com"})
    assert not has_sensitive_data({"details": "Led team", "impact": None})


def test_scan_statement_text_tags_details():
    matches = scan_statement_text("My SSN is 123-45-6789")
    assert [(m.type, m.field) for m in matches] == [("ssn", "details")]
    assert scan_statement_text(None) == []


def test_batch_blocks_on_any_record():
    result = scan_accomplishments_for_llm(
        [{"details": "Led team"}, {"details": "SSN 234-56-7890"}]
    )
    assert result.blocked
    assert len(result.matches) >= 1


def test_clean_batch_is_not_blocked():
    result = scan_accomplishments_for_llm(
        [{"details": "Led team", "impact": "Saved 40 hours"}, {"metrics": "3 audits"}]
    )
    assert result == LLMScanResult(blocked=False, matches=[])


def test_batch_accepts_attribute_records():
    record = SimpleNamespace(details="Fixed router", impact=None, metrics="Host 10.0.0.1")
    result = scan_accomplishments_for_llm([record])
    assert result.blocked
    assert [(m.type, m.field) for m in result.matches] == [("ip_address", "metrics")]


def test_scan_text_for_llm_ignores_blank_entries():
    assert not scan_text_for_llm(None, "", "   ").blocked
    result = scan_text_for_llm("Prior context", None, "Contact john.doe@example.com")
    assert result.blocked
    assert result.labels == ["Email Address"]


def test_llm_error_message_lists_labels():
    result = scan_text_for_llm("SSN 123-45-6789 and SSN 234-56-7890")
    assert result.error_message() == (
        "Sensitive data detected (Social Security Number). "
        "Please remove it before sending to an AI provider."
    )
    assert LLMScanResult(blocked=False).error_message() == ""


def test_summary_empty_for_no_matches():
    assert get_scan_summary([]) == ""


def test_summary_groups_by_category_without_values():
    text = "(S//NF) FOUO report, SSN 123-45-6789"
    matches = scan_statement_text(text)
    summary = get_scan_summary(matches)

    assert summary.startswith("Entry blocked: sensitive data detected.")
    assert summary.endswith("This system is UNCLASSIFIED. Do not enter classified, CUI, or PII.")
    classification = summary.index("Classification Marking:")
    cui = summary.index("Controlled Unclassified Information (CUI):")
    pii = summary.index("Personally Identifiable Information (PII):")
    assert classification < cui < pii
    assert "123-45-6789" not in summary
    assert "FOUO" not in summary


def test_summary_orders_labels_by_severity():
    matches = [
        _m("email", "PII", "Email Address", "medium"),
        _m("address", "PII", "Street Address", "medium"),
        _m("ssn", "PII", "Social Security Number", "critical"),
        _m("email", "PII", "Email Address", "medium", index=9),
    ]
    line = [l for l in get_scan_summary(matches).splitlines() if l.startswith("Personally")][0]
    assert line.endswith(": Social Security Number, Email Address, Street Address")


def test_check_write_blocks_with_summary():
    result = check_write({"details": "Led team", "impact": "Phone 703-555-1234"})
    assert result.blocked
    assert [m.field for m in result.matches] == ["impact"]
    assert "Phone Number" in result.error


def test_check_write_clean():
    result = check_write({"details": "Led team", "impact": None, "metrics": ""})
    assert not result.blocked
    assert result.matches == []
    assert result.error is None


def test_redact_fields_only_touches_matching_fields():
    fields = {
        "details": "Led team",
        "impact": "SSN is 123-45-6789 on file",
        "metrics": None,
    }
    result = redact_fields(fields)
    assert result.redacted_fields == ["impact"]
    assert result.fields == {
        "details": "Led team",
        "impact": "SSN is [REDACTED-SSN] on file",
        "metrics": None,
    }
    assert fields["impact"] == "SSN is 123-45-6789 on file"


def test_audit_event_excludes_values():
    matches = scan_statement_text("My SSN is 123-45-6789")
    event = build_audit_event(AuditAction.BLOCKED, matches, user_id="u-1")
    assert event == {
        "action": "blocked",
        "matches": [
            {
                "type": "ssn",
                "category": "PII",
                "severity": "critical",
                "label": "Social Security Number",
                "field": "details",
            }
        ],
        "user_id": "u-1",
        "record_id": None,
        "original_snippets": None,
    }


def test_audit_event_clean_and_redacted():
    clean = build_audit_event(AuditAction.SCAN_CLEAN, [], user_id="u-2", record_id="r-9")
    assert clean["matches"] is None
    assert clean["record_id"] == "r-9"

    snippets = {"impact": "SSN is 123-45-6789"}
    redacted = build_audit_event(
        AuditAction.REDACTED,
        [_m("ssn", "PII", "Social Security Number", "critical")],
        user_id="u-2",
        original_snippets=snippets,
    )
    assert redacted["original_snippets"] == snippets


def test_audit_event_unknown_action():
    with pytest.raises(ValueError):
        build_audit_event("deleted", [], user_id="u-3")
