"""
Domain exceptions - Semantic error types for the site backend.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each exception carries the user-facing message shown by the API.
"""


class DomainError(Exception):
    """Base class for domain errors."""

    message = "Error en la solicitud."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(DomainError):
    """A required field is missing or malformed."""

    message = "Faltan datos del formulario."

    def __init__(self, field: str | None = None, message: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidEmailError(ValidationError):
    """Email failed the basic syntax check."""

    message = "El correo no es válido."


class MessageTooLongError(ValidationError):
    """Free inquiry message exceeds the configured ceiling."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            field="message",
            message=f"La consulta gratuita admite hasta {limit} caracteres.",
        )
        self.limit = limit


class PasswordTooLongError(ValidationError):
    """Password does not fit in a bcrypt hash input."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            field="password",
            message=f"La contraseña admite hasta {limit} bytes.",
        )
        self.limit = limit


class DuplicateEmailError(DomainError):
    """A registration already exists for this email."""

    message = "Este correo ya está registrado."


class UploadRejected(DomainError):
    """Base class for upload constraint violations."""


class UnsupportedFormatError(UploadRejected):
    """Uploaded file has a MIME type outside the allowed set."""

    message = "Formato no permitido."


class PayloadTooLargeError(UploadRejected):
    """Uploaded file exceeds the size limit."""

    message = "Archivo demasiado grande."


class VerificationError(DomainError):
    """Base class for email verification errors."""


class MissingTokenError(VerificationError):
    """No token was supplied."""

    message = "Token inválido."


class TokenNotFoundError(VerificationError):
    """No registration holds the token (unknown or already redeemed)."""

    message = "Token no encontrado o expirado."


class LoginError(DomainError):
    """Base class for login failures."""


class UserNotFoundError(LoginError):
    """No registration for the email."""

    message = "Usuario no encontrado."


class InvalidCredentialsError(LoginError):
    """Password does not match the stored hash."""

    message = "Contraseña incorrecta."


class UnverifiedAccountError(LoginError):
    """Credentials are valid but the email is not verified yet."""

    message = "Debes verificar tu correo antes de iniciar sesión."


class InfrastructureError(DomainError):
    """Store or mail transport failure."""

    message = "Error del servidor."


class StoreError(InfrastructureError):
    """Registration store operation failed."""


class MailError(InfrastructureError):
    """Email could not be sent."""
