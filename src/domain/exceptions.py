"""
Domain exceptions - Semantic error types for pre-registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ConfigurationError(RegistrationError):
    """A required setting (the database connection string) is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} is not configured")
        self.setting = setting


class InvalidRegistration(RegistrationError):
    """Submitted form failed validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class EmailAlreadyRegistered(RegistrationError):
    """A record with this email already exists."""

    pass
