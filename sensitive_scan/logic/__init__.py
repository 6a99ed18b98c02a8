# sensitive_scan/logic/__init__.py

"""Candidate validation strategies."""
