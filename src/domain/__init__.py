"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for professional
pre-registration. It defines its own port interfaces for infrastructure
abstraction, keeping storage and HTTP concerns in the adapters.
"""

from .exceptions import (
    ConfigurationError,
    EmailAlreadyRegistered,
    InvalidRegistration,
    RegistrationError,
)
from .ports import (
    ClientMetadata,
    NewRegistration,
    Profession,
    RegistrationForm,
    RegistrationRecord,
    RegistrationRepository,
    RegistrationSubmission,
)
from .registration import RegistrationService
from .validation import ValidationResult, check_specialties, validate_submission

__all__ = [
    "ClientMetadata",
    "ConfigurationError",
    "EmailAlreadyRegistered",
    "InvalidRegistration",
    "NewRegistration",
    "Profession",
    "RegistrationError",
    "RegistrationForm",
    "RegistrationRecord",
    "RegistrationRepository",
    "RegistrationService",
    "RegistrationSubmission",
    "ValidationResult",
    "check_specialties",
    "validate_submission",
]
