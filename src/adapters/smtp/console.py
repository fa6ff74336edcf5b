"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging outgoing messages instead of delivering
them. Used when no SMTP host is configured.
"""

import logging

from src.domain.ports import OutgoingEmail

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development - prints recipients, subjects and attachment names.
    """

    def send(self, message: OutgoingEmail) -> None:
        """
        Log one message at INFO level (simulates email delivery).

        Args:
            message: Message to "deliver"
        """
        attachments = ", ".join(a.filename for a in message.attachments) or "-"
        logger.info(
            "[EMAIL] To: %s Subject: %s Attachments: %s",
            message.to,
            message.subject,
            attachments,
        )
        if message.text:
            logger.info("[EMAIL] %s", message.text)
