"""
Notification dispatch.
Sends the rendered confirmation to the customer and the venue in a single
outbound message through an injected mail transport.
"""

import logging
from dataclasses import dataclass, field
from email.message import EmailMessage
from email.utils import make_msgid
from typing import List, Optional, Protocol, Sequence

import aiosmtplib

from domain.errors import DispatchError
from domain.models import BookingRequest
from services.confirmation_renderer import ConfirmationDocument


logger = logging.getLogger(__name__)


class MailTransport(Protocol):
    """Delivers a fully built message; raises on any transport fault."""

    async def send(self, message: EmailMessage) -> None:
        ...


class SmtpTransport:
    """SMTP delivery through aiosmtplib, one connection per message."""

    def __init__(
        self,
        hostname: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        start_tls: bool = True,
        use_tls: bool = False,
        timeout: float = 30.0,
    ):
        self.hostname = hostname
        self.port = port
        self.username = username or None
        self.password = password or None
        self.start_tls = start_tls
        self.use_tls = use_tls
        self.timeout = timeout

    async def send(self, message: EmailMessage) -> None:
        await aiosmtplib.send(
            message,
            hostname=self.hostname,
            port=self.port,
            username=self.username,
            password=self.password,
            start_tls=self.start_tls,
            use_tls=self.use_tls,
            timeout=self.timeout,
        )


class ConsoleTransport:
    """Development transport: logs the message instead of sending it."""

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            f"Email not sent (console transport): {message['Subject']}",
            extra={"mail_to": message["To"], "mail_from": message["From"]}
        )


@dataclass
class NotificationOutcome:
    """Result of one dispatch attempt."""

    success: bool
    recipients: List[str] = field(default_factory=list)
    message_id: Optional[str] = None
    error: Optional[DispatchError] = None


class NotificationDispatcher:
    """Builds the confirmation email and hands it to the transport once."""

    def __init__(self, transport: MailTransport, sender: str, venue_name: str, venue_email: str):
        self.transport = transport
        self.sender = sender
        self.venue_name = venue_name
        self.venue_email = venue_email

    def recipients_for(self, customer_email: str) -> List[str]:
        """The customer and the venue, in that order."""
        return [customer_email, self.venue_email]

    def subject_for(self, request: BookingRequest) -> str:
        return f"Group Booking Confirmation - {self.venue_name} - {request.date}"

    def build_message(
        self,
        recipients: Sequence[str],
        document: ConfirmationDocument,
        request: BookingRequest,
    ) -> EmailMessage:
        """
        Build the outbound message.

        The plain-text part always carries the full confirmation. The HTML part
        is the full document for inline delivery, or a short notice when the
        PDF rendering is attached.
        """
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = self.subject_for(request)
        message["Message-ID"] = make_msgid(domain=self.venue_email.rpartition("@")[2] or None)

        message.set_content(document.text)
        if document.has_attachment:
            message.add_alternative(document.summary_html or document.html, subtype="html")
            message.add_attachment(
                document.pdf,
                maintype="application",
                subtype="pdf",
                filename=document.attachment_filename,
            )
        else:
            message.add_alternative(document.html, subtype="html")

        return message

    async def dispatch(
        self,
        recipients: Sequence[str],
        document: ConfirmationDocument,
        request: BookingRequest,
    ) -> NotificationOutcome:
        """
        Send the confirmation in a single attempt.

        Transport faults are not retried; they come back as a failed outcome
        carrying a DispatchError.
        """
        message = self.build_message(recipients, document, request)

        try:
            await self.transport.send(message)
        except Exception as e:
            error = DispatchError(f"Mail transport failed: {type(e).__name__}: {e}")
            error.__cause__ = e
            return NotificationOutcome(success=False, recipients=list(recipients), error=error)

        logger.info(
            "Booking confirmation sent",
            extra={"booking_date": request.date, "recipient_count": len(recipients)}
        )
        return NotificationOutcome(
            success=True,
            recipients=list(recipients),
            message_id=message["Message-ID"],
        )
