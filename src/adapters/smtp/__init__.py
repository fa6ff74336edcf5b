"""Email sender adapters - SMTP delivery and console logging."""

from .console import ConsoleEmailSender
from .smtp import SmtpEmailSender

__all__ = ["ConsoleEmailSender", "SmtpEmailSender"]
