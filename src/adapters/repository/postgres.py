"""
PostgreSQL repository adapter - Implements RegistrationRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Consistency:
- Email uniqueness is enforced by the UNIQUE constraint on
  registrations.email; create() uses INSERT ... ON CONFLICT DO NOTHING
  so a concurrent duplicate performs no write.
- Token redemption is a single UPDATE ... RETURNING statement, so
  verified=TRUE and a cleared token are never observed separately.
- A CHECK constraint forbids a verified row that still holds a token.
"""

import logging
from pathlib import Path

import psycopg
from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StoreError
from src.domain.ports import Registration

logger = logging.getLogger(__name__)

_COLUMNS = """
    name, surname, email, password_hash, address, city, postal_code, country,
    verified, verification_token
"""


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries. Driver errors are raised as
    StoreError.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> Registration | None:
        sql = f"SELECT {_COLUMNS} FROM registrations WHERE email = %s"

        try:
            with self._pool.connection() as conn, conn.cursor(
                row_factory=class_row(Registration)
            ) as cursor:
                cursor.execute(sql, (email,))
                return cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Registration lookup failed: %s", e)
            raise StoreError() from e

    def create(self, registration: Registration) -> bool:
        """
        Insert a registration unless the email is already taken.

        Returns:
            True if inserted, False if the email already exists
        """
        sql = """
            INSERT INTO registrations (
                name, surname, email, password_hash, address, city, postal_code,
                country, verified, verification_token, created_at
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, NOW())
            ON CONFLICT (email) DO NOTHING
        """
        params = (
            registration.name,
            registration.surname,
            registration.email,
            registration.password_hash,
            registration.address,
            registration.city,
            registration.postal_code,
            registration.country,
            registration.verified,
            registration.verification_token,
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                conn.commit()
                return cursor.rowcount == 1
        except psycopg.Error as e:
            logger.error("Registration insert failed: %s", e)
            raise StoreError() from e

    def redeem_token(self, token: str) -> Registration | None:
        """
        Verify the registration holding the token and clear the token.

        Returns:
            The verified registration, or None if no row holds the token
        """
        sql = f"""
            UPDATE registrations
            SET verified = TRUE, verification_token = NULL, verified_at = NOW()
            WHERE verification_token = %s AND verified = FALSE
            RETURNING {_COLUMNS}
        """

        try:
            with self._pool.connection() as conn, conn.cursor(
                row_factory=class_row(Registration)
            ) as cursor:
                cursor.execute(sql, (token,))
                row = cursor.fetchone()
                conn.commit()
                return row
        except psycopg.Error as e:
            logger.error("Token redemption failed: %s", e)
            raise StoreError() from e


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
