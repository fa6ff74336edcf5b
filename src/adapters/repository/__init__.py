"""Repository adapters - Database implementations."""

from .postgres import PostgresRegistrationRepository, run_migrations

__all__ = ["PostgresRegistrationRepository", "run_migrations"]
