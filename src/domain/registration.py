"""
Registration domain service - sign-up, email verification and login.

Verification lifecycle (forward-only)
=====================================

    register   -> unverified (token issued, verification email sent)
    verify     -> verified   (token cleared, single use)

Login is stateless: a successful call returns the stored profile and
issues no session or credential.

Note: the record is written before the verification email is sent. If
the send fails the caller sees a server error and the record stays
unverified with its token.
"""

import logging
import secrets
from dataclasses import dataclass

import bcrypt

from .exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    MissingTokenError,
    PasswordTooLongError,
    TokenNotFoundError,
    UnverifiedAccountError,
    UserNotFoundError,
)
from .messages import verification_email
from .ports import EmailSender, Registration, RegistrationRepository

logger = logging.getLogger(__name__)

VERIFY_PATH = "/verificar"
# bcrypt only reads the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class Applicant:
    """Profile fields submitted with a registration."""

    name: str
    surname: str
    email: str
    address: str
    city: str
    postal_code: str
    country: str


@dataclass
class RegistrationService:
    """
    Domain service for user registration and login.

    Orchestrates the registration flow: email normalization,
    password hashing, token generation, persistence and the
    verification email.
    """

    repository: RegistrationRepository
    email_sender: EmailSender
    site_name: str = "Guía Técnica Pericial"
    bcrypt_cost: int = 10

    def register(self, applicant: Applicant, password: str, base_url: str) -> Registration:
        """
        Register a new user and send the verification email.

        Args:
            applicant: Profile fields (email will be normalized)
            password: Plaintext password (will be hashed)
            base_url: Public site root used to build the verification link

        Returns:
            The stored registration

        Raises:
            PasswordTooLongError: If the password exceeds MAX_PASSWORD_BYTES
            DuplicateEmailError: If the email is already registered
            StoreError: If the store fails
            MailError: If the verification email cannot be sent
        """
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)

        email = self._normalize_email(applicant.email)
        if self.repository.find_by_email(email) is not None:
            raise DuplicateEmailError()

        registration = Registration(
            name=applicant.name,
            surname=applicant.surname,
            email=email,
            password_hash=self._hash_password(password),
            address=applicant.address,
            city=applicant.city,
            postal_code=applicant.postal_code,
            country=applicant.country,
            verified=False,
            verification_token=self._generate_token(),
        )
        # Lost a race with a concurrent registration for the same email
        if not self.repository.create(registration):
            raise DuplicateEmailError()

        link = self.verification_link(base_url, registration.verification_token)
        self.email_sender.send(
            verification_email(registration, link, site_name=self.site_name)
        )
        logger.info("Registration stored, verification sent to %s", email)
        return registration

    def verify(self, token: str | None) -> Registration:
        """
        Redeem a verification token.

        Raises:
            MissingTokenError: If no token was supplied
            TokenNotFoundError: If the token is unknown or already used
        """
        if not token or not token.strip():
            raise MissingTokenError()

        registration = self.repository.redeem_token(token.strip())
        if registration is None:
            raise TokenNotFoundError()

        logger.info("Email verified: %s", registration.email)
        return registration

    def authenticate(self, email: str, password: str) -> Registration:
        """
        Check credentials for a verified account.

        The password is checked before the verified flag, so an
        unverified account with a wrong password reports the password
        mismatch.

        Raises:
            UserNotFoundError: If the email is not registered
            InvalidCredentialsError: If the password does not match
            UnverifiedAccountError: If the email is not verified yet
        """
        registration = self.repository.find_by_email(self._normalize_email(email))
        if registration is None:
            raise UserNotFoundError()

        # Longer passwords are never stored, so they cannot match
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise InvalidCredentialsError()

        if not bcrypt.checkpw(password.encode(), registration.password_hash.encode()):
            raise InvalidCredentialsError()

        if not registration.verified:
            raise UnverifiedAccountError()

        return registration

    @staticmethod
    def verification_link(base_url: str, token: str) -> str:
        """Join the site root with the verification path and token."""
        return f"{base_url.rstrip('/')}{VERIFY_PATH}?token={token}"

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _generate_token(self) -> str:
        """Generate a 256-bit random token, hex encoded."""
        return secrets.token_hex(32)

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt with the configured cost factor."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.bcrypt_cost)).decode()
