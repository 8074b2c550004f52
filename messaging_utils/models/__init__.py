"""Data models for the messaging helpers."""

from .config import (
    SMTPSenderConfig,
    TwilioSenderConfig,
    AfricasTalkingConfig,
    LoggingConfig,
    MessagingConfig,
)
from .credentials import (
    SMTPCredentials,
    EmailAttachment,
    TwilioCredentials,
    AfricasTalkingCredentials,
)
from .messages import (
    AtSmsRequest,
    AtSmsResponse,
    DispatchResult,
)

__all__ = [
    "SMTPSenderConfig",
    "TwilioSenderConfig",
    "AfricasTalkingConfig",
    "LoggingConfig",
    "MessagingConfig",
    "SMTPCredentials",
    "EmailAttachment",
    "TwilioCredentials",
    "AfricasTalkingCredentials",
    "AtSmsRequest",
    "AtSmsResponse",
    "DispatchResult",
]
