"""
Port interfaces - Domain types and protocol definitions.

This module defines the records the domain exchanges with infrastructure
and the repository interface (port) that adapters implement.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Protocol


class Profession(str, Enum):
    """
    Professions accepted by the sign-up form.

    Values are the tags submitted by the front-end.
    """

    ARCHITECT = "arquiteto"
    ENGINEER = "engenheiro"
    CONTRACTOR = "prestador"
    SUPPLIER = "fornecedor"
    BUILDER = "construtor"
    DESIGNER = "designer"
    OTHER = "outro"


@dataclass(frozen=True)
class RegistrationSubmission:
    """Raw form values as received, before sanitation."""

    name: Any = None
    profession: Any = None
    specialties: Any = None
    company: Any = None
    phone: Any = None
    email: Any = None
    city: Any = None


@dataclass(frozen=True)
class RegistrationForm:
    """Sanitized and validated form values."""

    name: str
    profession: Profession
    phone: str
    email: str
    city: str
    company: str = ""
    specialties: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClientMetadata:
    """Request metadata captured alongside a registration."""

    ip: str = "unknown"
    user_agent: str = "unknown"


@dataclass(frozen=True)
class NewRegistration:
    """Record to be inserted."""

    form: RegistrationForm
    metadata: ClientMetadata
    registered_at: datetime


@dataclass(frozen=True)
class RegistrationRecord:
    """Stored record, as returned by the repository after insert."""

    id: str
    name: str
    profession: Profession
    specialties: list[str]
    company: str
    phone: str
    email: str
    city: str
    registered_at: datetime
    ip: str
    user_agent: str


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def email_exists(self, email: str) -> bool:
        """
        Check whether a record with this email is already stored.

        Args:
            email: Normalized email address

        Returns:
            True if a record exists
        """
        ...

    def insert(self, registration: NewRegistration) -> RegistrationRecord:
        """
        Insert a new record.

        Args:
            registration: Validated form, metadata and creation timestamp

        Returns:
            The stored record including its assigned id

        Raises:
            EmailAlreadyRegistered: If the storage uniqueness constraint
                rejects the email (lost race against a concurrent insert)
        """
        ...
