"""
Submission domain service - payment receipts and customer inquiries.

Every submission is handled in two phases:

1. prepare_*: validate the fields and build the admin and submitter
   emails. Runs before the HTTP response; any failure is raised to the
   caller and the uploaded file (if any) is discarded.
2. deliver: send both emails concurrently, log each outcome and remove
   the uploaded file. Runs after the response; failures are only logged.
"""

import asyncio
import logging
import re
from dataclasses import dataclass

from . import messages
from .exceptions import InvalidEmailError, MessageTooLongError, ValidationError
from .ports import Attachment, EmailSender, OutgoingEmail, UploadStore

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Basic syntax check: local-part "@" domain containing a dot."""
    return bool(EMAIL_PATTERN.match(email))


@dataclass(frozen=True)
class Dispatch:
    """Emails produced by an accepted submission."""

    kind: str
    admin: OutgoingEmail
    submitter: OutgoingEmail
    upload: Attachment | None = None


@dataclass
class SubmissionService:
    """Validates submissions and relays them by email."""

    email_sender: EmailSender
    upload_store: UploadStore
    admin_email: str
    site_name: str = "Guía Técnica Pericial"
    max_free_chars: int = 500

    def prepare_receipt(
        self,
        *,
        name: str,
        email: str,
        concept: str,
        receipt: Attachment | None,
        site_url: str,
    ) -> Dispatch:
        """
        Validate a payment receipt submission.

        Raises:
            ValidationError: If the receipt file is missing
            InvalidEmailError: If the email fails the syntax check
        """
        if receipt is None:
            raise ValidationError(field="receipt")
        self._check_email(email)

        return Dispatch(
            kind="receipt",
            admin=messages.receipt_admin_email(
                admin_email=self.admin_email,
                name=name,
                email=email,
                concept=concept,
                receipt=receipt,
            ),
            submitter=messages.receipt_ack_email(
                name=name,
                email=email,
                concept=concept,
                site_url=site_url,
                site_name=self.site_name,
            ),
            upload=receipt,
        )

    def prepare_free_inquiry(
        self, *, name: str, email: str, topic: str, message: str
    ) -> Dispatch:
        """
        Validate a free inquiry.

        Raises:
            InvalidEmailError: If the email fails the syntax check
            MessageTooLongError: If the message exceeds max_free_chars
        """
        self._check_email(email)
        if len(message) > self.max_free_chars:
            raise MessageTooLongError(self.max_free_chars)

        return Dispatch(
            kind="free-inquiry",
            admin=messages.free_inquiry_admin_email(
                admin_email=self.admin_email,
                name=name,
                email=email,
                topic=topic,
                message=message,
            ),
            submitter=messages.free_inquiry_ack_email(
                name=name,
                email=email,
                topic=topic,
                message=message,
                site_name=self.site_name,
            ),
        )

    def prepare_quote_inquiry(
        self,
        *,
        name: str,
        email: str,
        topic: str,
        description: str,
        attachment: Attachment | None,
    ) -> Dispatch:
        """
        Validate a paid (quote) inquiry.

        Raises:
            InvalidEmailError: If the email fails the syntax check
        """
        self._check_email(email)

        return Dispatch(
            kind="quote-inquiry",
            admin=messages.quote_admin_email(
                admin_email=self.admin_email,
                name=name,
                email=email,
                topic=topic,
                description=description,
                attachment=attachment,
            ),
            submitter=messages.quote_ack_email(
                name=name,
                email=email,
                topic=topic,
                description=description,
                site_name=self.site_name,
            ),
            upload=attachment,
        )

    async def deliver(self, dispatch: Dispatch) -> None:
        """
        Send the admin and submitter emails, then drop the upload.

        Both sends start together and settle independently. Failures
        are logged and never retried. The upload is removed once both
        have settled, whatever the outcome.
        """
        try:
            results = await asyncio.gather(
                asyncio.to_thread(self.email_sender.send, dispatch.admin),
                asyncio.to_thread(self.email_sender.send, dispatch.submitter),
                return_exceptions=True,
            )
            for role, result in zip(("admin", "submitter"), results):
                if isinstance(result, BaseException):
                    logger.error(
                        "[%s] %s email failed: %s", dispatch.kind, role, result
                    )
                else:
                    logger.info("[%s] %s email sent", dispatch.kind, role)
        finally:
            if dispatch.upload is not None:
                await asyncio.to_thread(self.upload_store.discard, dispatch.upload.path)

    def _check_email(self, email: str) -> None:
        if not is_valid_email(email):
            raise InvalidEmailError(field="email")
