# sensitive_scan/service/__init__.py

"""Service layer: settings, decision wrappers, summaries and audit metadata."""
