"""Outbound email over authenticated SMTP."""

import smtplib
import ssl
from email.message import Message
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from typing import List, Optional, Sequence

from ..exceptions import ConfigurationError, MessageValidationError, TransportError
from ..models.config import SMTPSenderConfig
from ..models.credentials import EmailAttachment, SMTPCredentials
from ..models.messages import DispatchResult
from ..utils.correlation import correlation_scope
from ..utils.logging import LoggerMixin

SMTP_SSL_PORT = 465
ATTACHMENT_SUBTYPE = "octet-stream"


class SMTPSender(LoggerMixin):
    """Builds a MIME message and submits it in a single SMTP transaction."""

    channel = "smtp"

    def __init__(self, config: Optional[SMTPSenderConfig] = None):
        self.config = config or SMTPSenderConfig()

    def send(
        self,
        credentials: SMTPCredentials,
        receivers: Sequence[str],
        subject: Optional[str] = None,
        message: Optional[str] = None,
        is_html: bool = False,
        attachments: Optional[Sequence[EmailAttachment]] = None,
    ) -> DispatchResult:
        """
        Send one email.

        Args:
            credentials: SMTP server and login details
            receivers: To addresses, at least one
            subject: Subject header, omitted when None
            message: Body text, omitted when None
            is_html: Send the body as text/html instead of text/plain
            attachments: Streams attached as application/octet-stream

        Returns:
            DispatchResult for the submitted message

        Raises:
            MessageValidationError: no receivers, or an unnamed attachment
            ConfigurationError: port is not a number
            TransportError: connection, TLS, login or submission failed
        """
        if isinstance(receivers, str):
            raise MessageValidationError("Receivers must be a list of addresses, not a string")

        receivers = list(receivers or [])
        if not receivers:
            raise MessageValidationError("At least one receiver is required")

        attachments = list(attachments or [])
        for attachment in attachments:
            if attachment.name is None:
                raise MessageValidationError("Attachment name cannot be empty")

        port = self._parse_port(credentials.port)

        with correlation_scope() as correlation_id:
            email_msg = self._build_message(
                credentials, receivers, subject, message, is_html, attachments
            )
            self._deliver(credentials, port, email_msg, receivers)

            self.log_info(
                f"Email sent via {credentials.host}:{port}",
                recipients_count=len(receivers),
                attachments_count=len(attachments),
            )

            return DispatchResult(
                correlation_id=correlation_id,
                channel=self.channel,
                recipients=receivers,
            )

    def _parse_port(self, port: str) -> int:
        try:
            return int(port)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid port number: {port!r}") from e

    def _build_message(
        self,
        credentials: SMTPCredentials,
        receivers: List[str],
        subject: Optional[str],
        message: Optional[str],
        is_html: bool,
        attachments: List[EmailAttachment],
    ) -> Message:
        """
        Assemble the outgoing message.

        A message with attachments is multipart/mixed; otherwise it is a
        single text part, or a bare header block when there is no body.
        """
        text_subtype = "html" if is_html else "plain"

        if attachments:
            msg = MIMEMultipart("mixed")
            if message is not None:
                msg.attach(MIMEText(message, text_subtype, "utf-8"))
            for attachment in attachments:
                msg.attach(self._attachment_part(attachment))
        elif message is not None:
            msg = MIMEText(message, text_subtype, "utf-8")
        else:
            msg = Message()

        msg["From"] = credentials.sender
        msg["To"] = ", ".join(receivers)
        if subject is not None:
            msg["Subject"] = subject
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid()

        return msg

    def _attachment_part(self, attachment: EmailAttachment) -> MIMEApplication:
        part = MIMEApplication(attachment.read_once(), _subtype=ATTACHMENT_SUBTYPE)
        part.add_header("Content-Disposition", "attachment", filename=attachment.name)
        return part

    def _deliver(
        self,
        credentials: SMTPCredentials,
        port: int,
        email_msg: Message,
        receivers: List[str],
    ) -> None:
        try:
            with self._connect(credentials.host, port) as smtp_client:
                self._secure(smtp_client, credentials, port)

                if credentials.username and credentials.password:
                    self._authenticate(smtp_client, credentials)

                refused = smtp_client.send_message(email_msg, to_addrs=receivers)
                # smtplib only raises when every recipient is refused
                if refused:
                    raise smtplib.SMTPRecipientsRefused(refused)

        except (smtplib.SMTPException, OSError) as e:
            self.log_error(
                f"Failed to send email: {e} (host: {credentials.host}:{port}, type: {type(e).__name__})"
            )
            raise TransportError(str(e)) from e

    def _connect(self, host: str, port: int) -> smtplib.SMTP:
        if port == SMTP_SSL_PORT:
            return smtplib.SMTP_SSL(
                host,
                port,
                context=ssl.create_default_context(),
                timeout=self.config.timeout,
            )
        return smtplib.SMTP(host, port, timeout=self.config.timeout)

    def _secure(
        self, smtp_client: smtplib.SMTP, credentials: SMTPCredentials, port: int
    ) -> None:
        """
        Greet the server and upgrade a plain connection with STARTTLS.

        use_tls makes the upgrade mandatory; without it the upgrade still
        happens whenever the server advertises STARTTLS.
        """
        smtp_client.ehlo()
        if port == SMTP_SSL_PORT:
            return

        if credentials.use_tls or smtp_client.has_extn("starttls"):
            smtp_client.starttls(context=ssl.create_default_context())
            # STARTTLS discards the extensions learned so far
            smtp_client.ehlo()
            self.log_debug(f"STARTTLS negotiated with {credentials.host}")

    def _authenticate(self, smtp_client: smtplib.SMTP, credentials: SMTPCredentials) -> None:
        """Log in, unless the server does not offer AUTH at all."""
        if not smtp_client.has_extn("auth"):
            self.log_warning(
                f"{credentials.host} does not advertise AUTH, sending unauthenticated"
            )
            return

        smtp_client.login(credentials.username, credentials.password)
        self.log_debug(
            f"SMTP authentication successful for {credentials.username}@{credentials.host}"
        )


def send_smtp_email_message(
    credentials: SMTPCredentials,
    receivers: Sequence[str],
    subject: Optional[str] = None,
    message: Optional[str] = None,
    is_html: bool = False,
    attachments: Optional[Sequence[EmailAttachment]] = None,
) -> DispatchResult:
    """Send one email with a default-configured SMTPSender."""
    return SMTPSender().send(
        credentials,
        receivers,
        subject=subject,
        message=message,
        is_html=is_html,
        attachments=attachments,
    )
