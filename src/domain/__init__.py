"""
Domain layer - Pure business logic with zero framework imports.

This package contains the registration, login and submission logic of
the site backend. It defines its own port interfaces for infrastructure
abstraction, so the store, mail transport and upload storage stay
replaceable.
"""

from .exceptions import (
    DomainError,
    DuplicateEmailError,
    InfrastructureError,
    InvalidCredentialsError,
    InvalidEmailError,
    MailError,
    MessageTooLongError,
    MissingTokenError,
    PasswordTooLongError,
    PayloadTooLargeError,
    StoreError,
    TokenNotFoundError,
    UnsupportedFormatError,
    UnverifiedAccountError,
    UserNotFoundError,
    ValidationError,
)
from .ports import (
    Attachment,
    EmailSender,
    OutgoingEmail,
    Registration,
    RegistrationRepository,
    UploadStore,
)
from .registration import Applicant, RegistrationService
from .submissions import Dispatch, SubmissionService, is_valid_email

__all__ = [
    "Applicant",
    "Attachment",
    "Dispatch",
    "DomainError",
    "DuplicateEmailError",
    "EmailSender",
    "InfrastructureError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "MailError",
    "MessageTooLongError",
    "MissingTokenError",
    "OutgoingEmail",
    "PasswordTooLongError",
    "PayloadTooLargeError",
    "Registration",
    "RegistrationRepository",
    "RegistrationService",
    "StoreError",
    "SubmissionService",
    "TokenNotFoundError",
    "UnsupportedFormatError",
    "UnverifiedAccountError",
    "UploadStore",
    "UserNotFoundError",
    "ValidationError",
    "is_valid_email",
]
