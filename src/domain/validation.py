"""
Registration form validation.

Sanitation, specialty normalization and the profession-keyed specialty
rules. Everything here is pure: no I/O, no storage access.

Validation order (first failure wins):
1. Required fields (nome, profissao, telefone, email, cidade)
2. No NUL characters in any text field or specialty
3. Length limits (nome, empresa, cidade)
4. Email syntax
5. Phone digit count (ASCII digits only)
6. Profession tag
7. Specialty rules for the profession
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidRegistration
from .ports import Profession, RegistrationForm, RegistrationSubmission

MAX_TEXT_LENGTH = 100
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 11

CONTRACTOR_SPECIALTIES = frozenset(
    {
        "pedreiro",  # mason
        "eletricista",  # electrician
        "encanador",  # plumber
        "gesseiro",  # plasterer
        "pintor",  # painter
        "instalador-pisos",  # floor installer
    }
)

ENGINEER_SPECIALTIES = frozenset(
    {
        "projetista",  # designer role
        "gerenciamento-obras",  # construction management
        "orcamentista",  # cost estimation
    }
)

_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single validation rule."""

    ok: bool
    field: str | None = None
    message: str | None = None

    @classmethod
    def passed(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, field: str, message: str) -> "ValidationResult":
        return cls(ok=False, field=field, message=message)

    def raise_for_failure(self) -> None:
        """Raise InvalidRegistration if this result is a failure."""
        if not self.ok:
            raise InvalidRegistration(self.field or "", self.message or "")


def sanitize_text(value: Any) -> str:
    """Coerce a form value to a stripped string (falsy values become empty)."""
    if not value:
        return ""
    return str(value).strip()


def normalize_specialties(value: Any) -> list[str]:
    """
    Normalize specialties to a list of trimmed, non-empty strings.

    Accepts a list/tuple, a comma-separated string, or nothing.
    Order is preserved.
    """
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        items = [sanitize_text(item) for item in value]
    elif isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    else:
        return []
    return [item for item in items if item]


def phone_digits(phone: str) -> str:
    """Strip everything but digits from a phone number."""
    return _NON_DIGITS.sub("", phone)


def _check_contractor(specialties: list[str]) -> ValidationResult:
    if not specialties:
        return ValidationResult.failed(
            "especialidades",
            "Prestadores devem selecionar pelo menos uma especialidade.",
        )
    if any(item not in CONTRACTOR_SPECIALTIES for item in specialties):
        return ValidationResult.failed(
            "especialidades",
            "Especialidades inválidas para a profissão selecionada.",
        )
    return ValidationResult.passed()


def _check_engineer(specialties: list[str]) -> ValidationResult:
    if not specialties:
        return ValidationResult.failed(
            "especialidades",
            "Engenheiros devem selecionar uma especialidade.",
        )
    if len(specialties) > 1:
        return ValidationResult.failed(
            "especialidades",
            "Engenheiros devem selecionar apenas uma especialidade.",
        )
    if specialties[0] not in ENGINEER_SPECIALTIES:
        return ValidationResult.failed(
            "especialidades",
            "Especialidades inválidas para a profissão selecionada.",
        )
    return ValidationResult.passed()


_SPECIALTY_RULES: dict[Profession, Callable[[list[str]], ValidationResult]] = {
    Profession.CONTRACTOR: _check_contractor,
    Profession.ENGINEER: _check_engineer,
}


def check_specialties(profession: Profession, specialties: list[str]) -> ValidationResult:
    """
    Apply the specialty rule for a profession.

    Contractors need at least one specialty from the contractor set;
    engineers need exactly one from the engineer set. Other professions
    accept any list, including an empty one.
    """
    rule = _SPECIALTY_RULES.get(profession)
    if rule is None:
        return ValidationResult.passed()
    return rule(specialties)


def check_email(email: str) -> ValidationResult:
    """Check email syntax (no deliverability lookup)."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return ValidationResult.failed("email", "Email inválido.")
    return ValidationResult.passed()


def check_phone(phone: str) -> ValidationResult:
    """Phone must contain 10 or 11 digits once formatting is removed."""
    digits = phone_digits(phone)
    if PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        return ValidationResult.passed()
    return ValidationResult.failed("telefone", "Telefone inválido.")


def check_no_nul(field: str, values: list[str]) -> ValidationResult:
    """PostgreSQL text columns cannot store NUL characters."""
    if any("\x00" in value for value in values):
        return ValidationResult.failed(field, "Campos não podem conter caracteres nulos.")
    return ValidationResult.passed()


def check_length(field: str, label: str, value: str) -> ValidationResult:
    if len(value) > MAX_TEXT_LENGTH:
        return ValidationResult.failed(
            field, f"{label} deve ter no máximo {MAX_TEXT_LENGTH} caracteres."
        )
    return ValidationResult.passed()


def parse_profession(value: str) -> Profession:
    try:
        return Profession(value)
    except ValueError:
        raise InvalidRegistration("profissao", "Profissão inválida.") from None


def validate_submission(submission: RegistrationSubmission) -> RegistrationForm:
    """
    Sanitize and validate a raw submission.

    Args:
        submission: Raw form values

    Returns:
        Normalized RegistrationForm (email trimmed and lowercased)

    Raises:
        InvalidRegistration: On the first failing rule
    """
    name = sanitize_text(submission.name)
    profession_tag = sanitize_text(submission.profession)
    company = sanitize_text(submission.company)
    phone = sanitize_text(submission.phone)
    email = sanitize_text(submission.email).lower()
    city = sanitize_text(submission.city)
    specialties = normalize_specialties(submission.specialties)

    if not all((name, profession_tag, phone, email, city)):
        raise InvalidRegistration(
            "required", "Todos os campos obrigatórios devem ser preenchidos."
        )

    check_no_nul("nome", [name]).raise_for_failure()
    check_no_nul("profissao", [profession_tag]).raise_for_failure()
    check_no_nul("empresa", [company]).raise_for_failure()
    check_no_nul("telefone", [phone]).raise_for_failure()
    check_no_nul("email", [email]).raise_for_failure()
    check_no_nul("cidade", [city]).raise_for_failure()
    check_no_nul("especialidades", specialties).raise_for_failure()
    check_length("nome", "Nome", name).raise_for_failure()
    check_length("empresa", "Empresa", company).raise_for_failure()
    check_length("cidade", "Cidade", city).raise_for_failure()
    check_email(email).raise_for_failure()
    check_phone(phone).raise_for_failure()

    profession = parse_profession(profession_tag)
    check_specialties(profession, specialties).raise_for_failure()

    return RegistrationForm(
        name=name,
        profession=profession,
        specialties=specialties,
        company=company,
        phone=phone,
        email=email,
        city=city,
    )
