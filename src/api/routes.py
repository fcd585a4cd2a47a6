"""
API routes - Professional pre-registration endpoint.

This module defines the HTTP endpoints:
- OPTIONS /register - CORS preflight, always 200 with an empty body
- POST /register - Validate and store a pre-registration
- any other verb on /register - 405
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_client_metadata, get_registration_service
from src.api.errors import METHOD_NOT_ALLOWED_MESSAGE
from src.api.models import ErrorResponse, RegisteredData, RegisterRequest, RegisterResponse
from src.domain.exceptions import (
    ConfigurationError,
    EmailAlreadyRegistered,
    InvalidRegistration,
)
from src.domain.ports import ClientMetadata
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registration"])

SUCCESS_MESSAGE = "Pré-cadastro realizado com sucesso!"
DUPLICATE_MESSAGE = "Este email já está cadastrado."
CONFIGURATION_MESSAGE = "Variável DATABASE_URL não configurada."
INTERNAL_ERROR_MESSAGE = "Erro interno do servidor. Tente novamente."


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid field"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
    summary="Register a professional",
    description="Submit the professional sign-up form. The email must not be "
    "registered yet; specialties are checked against the chosen profession.",
)
def register(
    request_data: RegisterRequest | None = None,
    metadata: ClientMetadata = Depends(get_client_metadata),
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Validate and store a professional pre-registration.

    - **nome**, **profissao**, **telefone**, **email**, **cidade**: required
    - **especialidades**: required for prestador (one or more) and
      engenheiro (exactly one)
    - **empresa**: optional
    """
    submission = (request_data or RegisterRequest()).to_submission()

    try:
        record = service.register(submission, metadata)
    except InvalidRegistration as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from None
    except EmailAlreadyRegistered as e:
        logger.info("Duplicate pre-registration rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=DUPLICATE_MESSAGE
        ) from None
    except ConfigurationError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=CONFIGURATION_MESSAGE,
        ) from None
    except Exception:
        logger.exception("Pre-registration failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR_MESSAGE,
        ) from None

    return RegisterResponse(
        message=SUCCESS_MESSAGE,
        data=RegisteredData.from_record(record),
    )


@router.options("/register", include_in_schema=False)
def preflight() -> Response:
    """CORS preflight; headers are added by the CORS middleware."""
    return Response(status_code=status.HTTP_200_OK)


@router.api_route(
    "/register",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def method_not_allowed() -> None:
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail=METHOD_NOT_ALLOWED_MESSAGE,
        headers={"Allow": "POST, OPTIONS"},
    )
