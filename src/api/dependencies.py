"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services, infrastructure adapters and request metadata into routes.
"""

from fastapi import Depends, Request

from src.adapters.repository.connection import ConnectionProvider
from src.adapters.repository.postgres import PostgresRegistrationRepository
from src.domain.ports import ClientMetadata
from src.domain.registration import RegistrationService

UNKNOWN = "unknown"


def get_connections(request: Request) -> ConnectionProvider:
    """
    Get the connection provider from app state.

    The provider is created with the application; the pool behind it
    opens on first use.
    """
    return request.app.state.connections


def get_repository(
    connections: ConnectionProvider = Depends(get_connections),
) -> PostgresRegistrationRepository:
    """Create repository backed by the shared connection provider."""
    return PostgresRegistrationRepository(connections)


def get_registration_service(
    repository: PostgresRegistrationRepository = Depends(get_repository),
) -> RegistrationService:
    """Create registration service with injected repository."""
    return RegistrationService(repository=repository)


def get_client_metadata(request: Request) -> ClientMetadata:
    """
    Capture client IP and user agent.

    IP resolution order: first hop of X-Forwarded-For, X-Real-IP,
    the socket peer address, then "unknown".
    """
    headers = request.headers

    forwarded_for = headers.get("x-forwarded-for", "").split(",")[0].strip()
    real_ip = headers.get("x-real-ip", "").strip()
    peer = request.client.host if request.client else ""

    ip = forwarded_for or real_ip or peer or UNKNOWN
    user_agent = headers.get("user-agent") or UNKNOWN
    return ClientMetadata(ip=ip, user_agent=user_agent)
