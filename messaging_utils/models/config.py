"""Configuration models using Pydantic for environment-based settings."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

AFRICASTALKING_LIVE_URL = "https://api.africastalking.com"
AFRICASTALKING_SANDBOX_URL = "https://api.sandbox.africastalking.com"


class SMTPSenderConfig(BaseSettings):
    """Outbound SMTP connection options."""

    timeout: Optional[float] = Field(
        default=None, description="Socket timeout in seconds (None blocks)"
    )

    model_config = {"env_prefix": "SMTP_", "extra": "ignore"}


class TwilioSenderConfig(BaseSettings):
    """Twilio REST client options."""

    timeout: Optional[float] = Field(
        default=None, description="HTTP timeout in seconds (None blocks)"
    )

    model_config = {"env_prefix": "TWILIO_", "extra": "ignore"}


class AfricasTalkingConfig(BaseSettings):
    """Africa's Talking messaging endpoint configuration."""

    base_url: str = Field(
        default=AFRICASTALKING_LIVE_URL, description="API base URL"
    )
    sandbox: bool = Field(
        default=False, description="Send through the sandbox environment"
    )
    timeout: Optional[float] = Field(
        default=None, description="HTTP timeout in seconds (None blocks)"
    )

    model_config = {"env_prefix": "AFRICASTALKING_", "extra": "ignore"}

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/")

    @property
    def messaging_url(self) -> str:
        """Full URL of the bulk SMS endpoint."""
        base_url = AFRICASTALKING_SANDBOX_URL if self.sandbox else self.base_url
        return f"{base_url}/version1/messaging"


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format (json or text)")

    model_config = {"env_prefix": "LOG_", "extra": "ignore"}


class MessagingConfig(BaseSettings):
    """Top-level configuration for the senders."""

    smtp: SMTPSenderConfig = Field(default_factory=SMTPSenderConfig)
    twilio: TwilioSenderConfig = Field(default_factory=TwilioSenderConfig)
    africastalking: AfricasTalkingConfig = Field(
        default_factory=AfricasTalkingConfig
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}
