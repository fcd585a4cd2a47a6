"""
PostgreSQL repository adapter - Implements RegistrationRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness:
-----------
The unique index on pre_registrations(email) is the authoritative guard
against duplicate registrations. The service pre-checks with
email_exists(), but two concurrent requests can both pass that check;
the losing INSERT then fails with UniqueViolation, which insert()
translates into the domain's EmailAlreadyRegistered.
"""

import logging
from pathlib import Path
from typing import Any

from psycopg.errors import UniqueViolation
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailAlreadyRegistered
from src.domain.ports import NewRegistration, RegistrationRecord

logger = logging.getLogger(__name__)


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: Any) -> None:
        """
        Initialize repository with a connection source.

        Args:
            pool: psycopg3 ConnectionPool, or any object exposing the same
                connection() context manager (e.g. ConnectionProvider)
        """
        self._pool = pool

    def email_exists(self, email: str) -> bool:
        """
        Check whether a registration with this email exists.

        Args:
            email: Normalized email address (lowercase, stripped)

        Returns:
            True if a row with this email is stored
        """
        sql = "SELECT 1 FROM pre_registrations WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            return cursor.fetchone() is not None

    def insert(self, registration: NewRegistration) -> RegistrationRecord:
        """
        Insert a new pre-registration row.

        Args:
            registration: Validated form, client metadata and timestamp

        Returns:
            RegistrationRecord with the database-assigned id

        Raises:
            EmailAlreadyRegistered: If the unique email index rejects the row
        """
        sql = """
            INSERT INTO pre_registrations
                (name, profession, specialties, company, phone, email, city,
                 registered_at, ip, user_agent)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
        """
        form = registration.form
        metadata = registration.metadata
        params = (
            form.name,
            form.profession.value,
            list(form.specialties),
            form.company,
            form.phone,
            form.email,
            form.city,
            registration.registered_at,
            metadata.ip,
            metadata.user_agent,
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
        except UniqueViolation as e:
            raise EmailAlreadyRegistered(form.email) from e

        return RegistrationRecord(
            id=str(row[0]),
            name=form.name,
            profession=form.profession,
            specialties=list(form.specialties),
            company=form.company,
            phone=form.phone,
            email=form.email,
            city=form.city,
            registered_at=registration.registered_at,
            ip=metadata.ip,
            user_agent=metadata.user_agent,
        )


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
