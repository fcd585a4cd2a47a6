"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A valid sign-up payload
- An in-memory repository standing in for PostgreSQL
"""

import uuid

import pytest

from src.domain.exceptions import EmailAlreadyRegistered
from src.domain.ports import NewRegistration, RegistrationRecord


class InMemoryRegistrationRepository:
    """Implements RegistrationRepository protocol with a dict keyed by email."""

    def __init__(self) -> None:
        self.records: dict[str, RegistrationRecord] = {}

    def email_exists(self, email: str) -> bool:
        return email in self.records

    def insert(self, registration: NewRegistration) -> RegistrationRecord:
        form = registration.form
        if form.email in self.records:
            raise EmailAlreadyRegistered(form.email)
        record = RegistrationRecord(
            id=str(uuid.uuid4()),
            name=form.name,
            profession=form.profession,
            specialties=list(form.specialties),
            company=form.company,
            phone=form.phone,
            email=form.email,
            city=form.city,
            registered_at=registration.registered_at,
            ip=registration.metadata.ip,
            user_agent=registration.metadata.user_agent,
        )
        self.records[form.email] = record
        return record


@pytest.fixture
def memory_repository() -> InMemoryRegistrationRepository:
    """Empty in-memory repository."""
    return InMemoryRegistrationRepository()


@pytest.fixture
def valid_payload() -> dict:
    """A sign-up payload that passes every validation rule."""
    return {
        "nome": "Maria Souza",
        "profissao": "arquiteto",
        "especialidades": [],
        "empresa": "Souza Arquitetura",
        "telefone": "(11) 98765-4321",
        "email": "maria@example.com",
        "cidade": "São Paulo",
    }
