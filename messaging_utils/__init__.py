"""
Messaging Utilities

Helpers that dispatch a single notification through SMTP email, Twilio SMS
or Africa's Talking SMS and report the outcome as a result or a typed error.
"""

from .exceptions import (
    MessagingError,
    MessageValidationError,
    ConfigurationError,
    TransportError,
    ProviderRejectionError,
    AmbiguousOutcomeError,
    DisguisedFailureError,
)
from .models import (
    SMTPCredentials,
    EmailAttachment,
    TwilioCredentials,
    AfricasTalkingCredentials,
    DispatchResult,
)
from .services import (
    SMTPSender,
    TwilioSender,
    AfricasTalkingSender,
    send_smtp_email_message,
    send_twilio_sms_message,
    send_africastalking_sms_message,
)

__version__ = "1.0.0"
__author__ = "Messaging Utilities Team"
__description__ = "Email and SMS dispatch helpers"

__all__ = [
    "MessagingError",
    "MessageValidationError",
    "ConfigurationError",
    "TransportError",
    "ProviderRejectionError",
    "AmbiguousOutcomeError",
    "DisguisedFailureError",
    "SMTPCredentials",
    "EmailAttachment",
    "TwilioCredentials",
    "AfricasTalkingCredentials",
    "DispatchResult",
    "SMTPSender",
    "TwilioSender",
    "AfricasTalkingSender",
    "send_smtp_email_message",
    "send_twilio_sms_message",
    "send_africastalking_sms_message",
]
