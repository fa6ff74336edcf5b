"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
Process-wide resources (connection pool, mail sender) are created once
in the app lifespan and read from app.state.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresRegistrationRepository
from src.adapters.smtp import ConsoleEmailSender, SmtpEmailSender
from src.adapters.storage import LocalUploadStore, UploadPolicy
from src.config.settings import Settings, get_settings
from src.domain.ports import EmailSender
from src.domain.registration import RegistrationService
from src.domain.submissions import SubmissionService

RECEIPT_TYPES = frozenset({"application/pdf", "image/png", "image/jpeg", "image/jpg"})
QUOTE_TYPES = RECEIPT_TYPES | {"text/plain"}


def build_email_sender(settings: Settings) -> EmailSender:
    """SMTP sender when a host is configured, console logging otherwise."""
    if not settings.smtp_host:
        return ConsoleEmailSender()
    return SmtpEmailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_user,
        password=settings.smtp_password,
        from_address=settings.sender_address,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout,
    )


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresRegistrationRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresRegistrationRepository(pool)


def get_email_sender(request: Request) -> EmailSender:
    """Get the process-wide email sender from app state."""
    return request.app.state.email_sender


def get_upload_store(settings: Settings = Depends(get_settings)) -> LocalUploadStore:
    return LocalUploadStore(settings.upload_dir)


def get_receipt_policy(settings: Settings = Depends(get_settings)) -> UploadPolicy:
    return UploadPolicy(
        allowed_types=RECEIPT_TYPES,
        max_bytes=settings.receipt_max_bytes,
        format_hint="PDF o imagen (PNG/JPG)",
    )


def get_quote_policy(settings: Settings = Depends(get_settings)) -> UploadPolicy:
    return UploadPolicy(
        allowed_types=QUOTE_TYPES,
        max_bytes=settings.quote_max_bytes,
        format_hint="PDF, imagen o TXT",
    )


def get_registration_service(
    repository: PostgresRegistrationRepository = Depends(get_repository),
    email_sender: EmailSender = Depends(get_email_sender),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository and email sender for the domain service.
    """
    return RegistrationService(
        repository=repository,
        email_sender=email_sender,
        site_name=settings.site_name,
        bcrypt_cost=settings.bcrypt_cost,
    )


def get_submission_service(
    email_sender: EmailSender = Depends(get_email_sender),
    upload_store: LocalUploadStore = Depends(get_upload_store),
    settings: Settings = Depends(get_settings),
) -> SubmissionService:
    return SubmissionService(
        email_sender=email_sender,
        upload_store=upload_store,
        admin_email=settings.admin_email,
        site_name=settings.site_name,
        max_free_chars=settings.max_free_chars,
    )


def site_url(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """
    Public site root without trailing slash.

    Falls back to the scheme and host the request came in on.
    """
    if settings.public_base_url:
        return settings.public_base_url.rstrip("/")
    return str(request.base_url).rstrip("/")


def thanks_url(settings: Settings = Depends(get_settings)) -> str:
    """Redirect target after an accepted form submission."""
    base = settings.public_base_url.rstrip("/")
    return f"{base}/gracias.html" if base else "/gracias.html"
