"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the plain data types that cross them.
Adapters implement these protocols.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass
class Registration:
    """
    Persisted record of one user sign-up.

    Verification lifecycle (forward-only):
    - unverified: verified=False, verification_token holds the emailed token
    - verified:   verified=True, verification_token is None

    The token is cleared in the same write that sets verified, so a
    verified registration never carries a token.
    """

    name: str
    surname: str
    email: str
    password_hash: str
    address: str
    city: str
    postal_code: str
    country: str
    verified: bool = False
    verification_token: str | None = None


@dataclass(frozen=True)
class Attachment:
    """A file on local disk to be attached to an email."""

    path: Path
    filename: str
    content_type: str


@dataclass(frozen=True)
class OutgoingEmail:
    """One templated message ready for delivery."""

    to: str
    subject: str
    html: str
    sender_name: str
    text: str | None = None
    attachments: tuple[Attachment, ...] = field(default_factory=tuple)


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def find_by_email(self, email: str) -> Registration | None:
        """
        Look up a registration by normalized email.

        Returns:
            The registration, or None if the email is not registered
        """
        ...

    def create(self, registration: Registration) -> bool:
        """
        Insert a new registration.

        The store's UNIQUE constraint on email guards concurrent attempts.

        Returns:
            True if inserted, False if the email was already registered
        """
        ...

    def redeem_token(self, token: str) -> Registration | None:
        """
        Mark the registration holding this token as verified.

        Sets verified=True and clears the token in a single write.

        Returns:
            The updated registration, or None if no registration holds the token
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send(self, message: OutgoingEmail) -> None:
        """
        Deliver one message.

        Raises:
            MailError: If the transport fails
        """
        ...


class UploadStore(Protocol):
    """Port interface for transient upload storage."""

    def discard(self, path: Path) -> None:
        """Remove a stored upload. Missing files are ignored."""
        ...
