"""
Unit tests for ConsoleEmailSender adapter.

Tests verify the console email sender implements EmailSender protocol
and logs outgoing messages in the expected format.
"""

import logging
from pathlib import Path

import pytest

from src.adapters.smtp.console import ConsoleEmailSender
from src.domain.ports import Attachment, EmailSender, OutgoingEmail


def make_message(**overrides) -> OutgoingEmail:
    fields = {
        "to": "ana@example.com",
        "subject": "Verifica tu correo",
        "html": "<p>hola</p>",
        "sender_name": "Guía Técnica Pericial",
    }
    fields.update(overrides)
    return OutgoingEmail(**fields)


class TestConsoleEmailSenderProtocol:
    """Tests for EmailSender protocol compliance."""

    def test_implements_email_sender_protocol(self) -> None:
        sender = ConsoleEmailSender()
        assert callable(sender.send)

        def accepts_email_sender(s: EmailSender) -> None:
            pass

        accepts_email_sender(sender)

    def test_no_explicit_inheritance(self) -> None:
        """ConsoleEmailSender uses structural subtyping, not inheritance."""
        assert ConsoleEmailSender.__bases__ == (object,)


class TestSend:
    """Tests for send method."""

    def test_logs_recipient_and_subject(self, caplog: pytest.LogCaptureFixture) -> None:
        sender = ConsoleEmailSender()

        with caplog.at_level(logging.INFO):
            sender.send(make_message())

        assert caplog.records[0].levelno == logging.INFO
        assert (
            caplog.records[0].getMessage()
            == "[EMAIL] To: ana@example.com Subject: Verifica tu correo Attachments: -"
        )

    def test_logs_attachment_names(self, caplog: pytest.LogCaptureFixture) -> None:
        attachment = Attachment(Path("/tmp/x"), "pago.pdf", "application/pdf")

        with caplog.at_level(logging.INFO):
            ConsoleEmailSender().send(make_message(attachments=(attachment,)))

        assert "Attachments: pago.pdf" in caplog.records[0].getMessage()

    def test_logs_text_body(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO):
            ConsoleEmailSender().send(make_message(text="Verifica tu correo: http://x"))

        assert len(caplog.records) == 2
        assert "http://x" in caplog.records[1].getMessage()
