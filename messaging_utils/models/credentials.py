"""Provider credentials and outgoing content models."""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class SMTPCredentials(BaseModel):
    """Connection and login details for an outbound SMTP server."""

    host: str = Field(..., description="SMTP server hostname")
    port: str = Field(..., description="SMTP server port, as text")
    username: str = Field(default="", description="SMTP authentication username")
    sender: str = Field(..., description="From address")
    password: str = Field(default="", description="SMTP authentication password")
    use_tls: bool = Field(default=False, description="Require STARTTLS")

    model_config = {"frozen": True}


class EmailAttachment(BaseModel):
    """A binary stream to attach to an outgoing email."""

    data: Any = Field(..., description="Readable binary stream")
    name: Optional[str] = Field(default=None, description="Attachment filename")

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data")
    @classmethod
    def validate_readable(cls, v):
        """Ensure data is a file-like object."""
        if not callable(getattr(v, "read", None)):
            raise ValueError("Attachment data must be a readable stream")
        return v

    def read_once(self) -> bytes:
        """Drain the stream; it is not read again afterwards."""
        content = self.data.read()
        if isinstance(content, str):
            content = content.encode()
        return content


class TwilioCredentials(BaseModel):
    """Twilio account credentials."""

    account_sid: str = Field(..., description="Account SID (basic auth username)")
    auth_token: str = Field(..., description="Auth token (basic auth password)")
    sender_phone_number: str = Field(..., description="Number messages are sent from")
    # Not used by the send path; the sender number is what Twilio displays.
    sender_name: str = Field(default="", description="Sender display name")

    model_config = {"frozen": True}


class AfricasTalkingCredentials(BaseModel):
    """Africa's Talking application credentials."""

    api_key: str = Field(..., description="API key sent in the apiKey header")
    username: str = Field(..., description="Application username")
    sender_id: str = Field(default="", description="Alphanumeric sender ID or short code")

    model_config = {"frozen": True}
