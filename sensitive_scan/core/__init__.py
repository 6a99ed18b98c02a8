# sensitive_scan/core/__init__.py

"""Core domain models and utilities used across the scanner.

This package provides rule and match types, exceptions, and the pattern
loader shared by the rest of the application.
"""
