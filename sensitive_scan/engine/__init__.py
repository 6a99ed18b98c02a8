# sensitive_scan/engine/__init__.py

"""Engine package providing the rule registry, matcher and redactor.

This package contains the components that turn the declarative rule
table into Presidio recognizers and apply them to text.
"""
