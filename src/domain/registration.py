"""
Registration domain service - Pre-registration intake.

This module contains the core business logic for professional
pre-registration: validate the submitted form, reject duplicate emails,
and persist exactly one record per email.

Duplicate detection happens twice:
- a pre-check (email_exists) before insert, so the common case never
  touches the uniqueness constraint
- the storage uniqueness constraint, which the repository surfaces as
  EmailAlreadyRegistered when a concurrent request wins the race

Both paths raise the same exception.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from .exceptions import EmailAlreadyRegistered
from .ports import (
    ClientMetadata,
    NewRegistration,
    RegistrationRecord,
    RegistrationRepository,
    RegistrationSubmission,
)
from .validation import validate_submission

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class RegistrationService:
    """
    Domain service for professional pre-registration.

    Orchestrates the intake flow: validation, duplicate check,
    and record persistence.
    """

    repository: RegistrationRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def register(
        self, submission: RegistrationSubmission, metadata: ClientMetadata
    ) -> RegistrationRecord:
        """
        Validate and store a new pre-registration.

        Args:
            submission: Raw form values
            metadata: Client IP and user agent of the request

        Returns:
            The stored record

        Raises:
            InvalidRegistration: If any field fails validation
            EmailAlreadyRegistered: If the email is already registered
        """
        form = validate_submission(submission)

        if self.repository.email_exists(form.email):
            raise EmailAlreadyRegistered(form.email)

        record = self.repository.insert(
            NewRegistration(form=form, metadata=metadata, registered_at=self.clock())
        )

        specialties = f" ({', '.join(record.specialties)})" if record.specialties else ""
        logger.info(
            "New pre-registration: %s <%s> - %s%s",
            record.name,
            record.email,
            record.profession.value,
            specialties,
        )
        return record
