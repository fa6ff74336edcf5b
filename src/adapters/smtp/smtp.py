"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers messages through smtplib with optional STARTTLS and login.
One connection is opened per message; transport failures are raised
as MailError.
"""

import logging
import smtplib
import ssl
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid

from src.domain.exceptions import MailError
from src.domain.ports import OutgoingEmail

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str = "",
        password: str = "",
        from_address: str = "",
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.from_address = from_address or username
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, message: OutgoingEmail) -> MIMEMultipart:
        """Build the MIME message, attaching files from disk."""
        msg = MIMEMultipart("mixed")
        msg["From"] = formataddr((message.sender_name, self.from_address))
        msg["To"] = message.to
        msg["Subject"] = message.subject
        msg["Message-ID"] = make_msgid()

        body = MIMEMultipart("alternative")
        if message.text:
            body.attach(MIMEText(message.text, "plain", "utf-8"))
        body.attach(MIMEText(message.html, "html", "utf-8"))
        msg.attach(body)

        for attachment in message.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            part = MIMEBase(maintype or "application", subtype or "octet-stream")
            part.set_payload(attachment.path.read_bytes())
            encoders.encode_base64(part)
            part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            msg.attach(part)

        return msg

    def send(self, message: OutgoingEmail) -> None:
        """
        Deliver one message.

        Raises:
            MailError: On SMTP or network failure, or unreadable attachment
        """
        try:
            mime = self.build_message(message)
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send to %s failed: %s", message.to, e)
            raise MailError() from e

        logger.info("Email sent to %s: %s", message.to, message.subject)
