"""Repository adapters - Database implementations."""

from .connection import ConnectionProvider
from .postgres import PostgresRegistrationRepository, run_migrations

__all__ = ["ConnectionProvider", "PostgresRegistrationRepository", "run_migrations"]
