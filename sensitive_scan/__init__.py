# sensitive_scan/__init__.py

"""Sensitive data scanner for PII, classification and CUI markings.

The public entry points live in :mod:`sensitive_scan.service.scanner`.
"""
