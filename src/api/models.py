"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Field names are the wire names used by the sign-up form.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.domain.ports import RegistrationRecord, RegistrationSubmission


class RegisterRequest(BaseModel):
    """
    Request model for professional pre-registration.

    Fields are deliberately loose: values are coerced and validated by the
    domain layer so every rule failure maps to a 400 with a specific message.
    """

    model_config = ConfigDict(extra="ignore")

    nome: Any = Field(None, description="Full name (max 100 characters)")
    profissao: Any = Field(
        None,
        description="Profession tag: arquiteto, engenheiro, prestador, fornecedor, "
        "construtor, designer or outro",
    )
    especialidades: Any = Field(
        None, description="List of specialty tags, or a comma-separated string"
    )
    empresa: Any = Field(None, description="Company name (optional)")
    telefone: Any = Field(None, description="Phone with 10 or 11 digits")
    email: Any = Field(None, description="Email address (unique)")
    cidade: Any = Field(None, description="City")

    def to_submission(self) -> RegistrationSubmission:
        return RegistrationSubmission(
            name=self.nome,
            profession=self.profissao,
            specialties=self.especialidades,
            company=self.empresa,
            phone=self.telefone,
            email=self.email,
            city=self.cidade,
        )


class RegisteredData(BaseModel):
    """Echoed subset of the stored record."""

    id: str
    nome: str
    email: str
    profissao: str
    especialidades: list[str]
    dataRegistro: datetime

    @classmethod
    def from_record(cls, record: RegistrationRecord) -> "RegisteredData":
        return cls(
            id=record.id,
            nome=record.name,
            email=record.email,
            profissao=record.profession.value,
            especialidades=record.specialties,
            dataRegistro=record.registered_at,
        )


class RegisterResponse(BaseModel):
    """Response model for successful pre-registration."""

    success: bool = True
    message: str
    data: RegisteredData


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
