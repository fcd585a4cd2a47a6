"""
Unit tests for RegistrationService domain logic.

Tests domain logic with mocked ports to verify:
- Validation happens before any storage access
- Duplicate detection (pre-check and storage constraint)
- Record persistence with metadata and server timestamp
- Success logging
"""

import logging
from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from src.domain.exceptions import EmailAlreadyRegistered, InvalidRegistration
from src.domain.ports import ClientMetadata, Profession, RegistrationSubmission
from src.domain.registration import RegistrationService

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def make_submission(**overrides) -> RegistrationSubmission:
    values = {
        "name": "João Lima",
        "profession": "prestador",
        "specialties": ["pintor", "pedreiro"],
        "company": "",
        "phone": "(21) 99999-0000",
        "email": "  Joao@Example.com ",
        "city": "Rio de Janeiro",
    }
    values.update(overrides)
    return RegistrationSubmission(**values)


@pytest.fixture
def metadata() -> ClientMetadata:
    return ClientMetadata(ip="203.0.113.7", user_agent="pytest")


class TestRegisterFlow:
    """Tests for the register orchestration."""

    def test_register_stores_normalized_record(
        self, memory_repository, metadata: ClientMetadata
    ) -> None:
        """A valid submission is stored once with normalized fields."""
        service = RegistrationService(repository=memory_repository, clock=lambda: FIXED_NOW)

        record = service.register(make_submission(), metadata)

        assert record.email == "joao@example.com"
        assert record.profession is Profession.CONTRACTOR
        assert record.specialties == ["pintor", "pedreiro"]
        assert record.registered_at == FIXED_NOW
        assert record.ip == "203.0.113.7"
        assert record.user_agent == "pytest"
        assert list(memory_repository.records) == ["joao@example.com"]

    def test_duplicate_email_raises(self, memory_repository, metadata: ClientMetadata) -> None:
        """Second registration with the same email is rejected."""
        service = RegistrationService(repository=memory_repository)
        service.register(make_submission(), metadata)

        with pytest.raises(EmailAlreadyRegistered):
            service.register(make_submission(email="JOAO@example.com"), metadata)

        assert len(memory_repository.records) == 1

    def test_duplicate_precheck_skips_insert(self, metadata: ClientMetadata) -> None:
        """When the pre-check finds the email, insert is never called."""
        repo = Mock()
        repo.email_exists.return_value = True

        service = RegistrationService(repository=repo)
        with pytest.raises(EmailAlreadyRegistered):
            service.register(make_submission(), metadata)

        repo.email_exists.assert_called_once_with("joao@example.com")
        repo.insert.assert_not_called()

    def test_storage_constraint_violation_propagates(self, metadata: ClientMetadata) -> None:
        """A lost race surfaces as the same EmailAlreadyRegistered."""
        repo = Mock()
        repo.email_exists.return_value = False
        repo.insert.side_effect = EmailAlreadyRegistered("joao@example.com")

        service = RegistrationService(repository=repo)
        with pytest.raises(EmailAlreadyRegistered):
            service.register(make_submission(), metadata)

    def test_invalid_submission_never_touches_storage(self, metadata: ClientMetadata) -> None:
        """Validation failures happen before any repository call."""
        repo = Mock()

        service = RegistrationService(repository=repo)
        with pytest.raises(InvalidRegistration):
            service.register(make_submission(specialties=[]), metadata)

        repo.email_exists.assert_not_called()
        repo.insert.assert_not_called()

    def test_insert_receives_server_timestamp(self, metadata: ClientMetadata) -> None:
        """The creation timestamp comes from the service clock."""
        repo = Mock()
        repo.email_exists.return_value = False

        service = RegistrationService(repository=repo, clock=lambda: FIXED_NOW)
        service.register(make_submission(), metadata)

        registration = repo.insert.call_args[0][0]
        assert registration.registered_at == FIXED_NOW
        assert registration.metadata == metadata
        assert registration.form.email == "joao@example.com"

    def test_default_clock_is_timezone_aware(
        self, memory_repository, metadata: ClientMetadata
    ) -> None:
        service = RegistrationService(repository=memory_repository)
        record = service.register(make_submission(), metadata)
        assert record.registered_at.tzinfo is not None


class TestRegisterLogging:
    """Tests for success logging."""

    def test_success_is_logged_with_specialties(
        self, memory_repository, metadata: ClientMetadata, caplog: pytest.LogCaptureFixture
    ) -> None:
        service = RegistrationService(repository=memory_repository)

        with caplog.at_level(logging.INFO, logger="src.domain.registration"):
            service.register(make_submission(), metadata)

        assert "joao@example.com" in caplog.text
        assert "prestador (pintor, pedreiro)" in caplog.text
