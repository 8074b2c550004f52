"""Senders for the SMTP, Twilio and Africa's Talking channels."""

from .smtp_sender import SMTPSender, send_smtp_email_message
from .twilio_sender import TwilioSender, send_twilio_sms_message
from .africastalking_sender import (
    AfricasTalkingSender,
    is_disguised_failure,
    send_africastalking_sms_message,
)

__all__ = [
    "SMTPSender",
    "send_smtp_email_message",
    "TwilioSender",
    "send_twilio_sms_message",
    "AfricasTalkingSender",
    "is_disguised_failure",
    "send_africastalking_sms_message",
]
