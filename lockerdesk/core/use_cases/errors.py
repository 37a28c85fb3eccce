from __future__ import annotations


class NotFoundError(Exception):
    """Raise to map to HTTP 404."""


class DomainRuleViolation(Exception):
    """Raise to map to HTTP 409 (domain rule violation)."""


class ValidationError(Exception):
    """Raise to map to HTTP 422 (validation error)."""
