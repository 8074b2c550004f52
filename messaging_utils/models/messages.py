"""Wire-level and result data models."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

Channel = Literal["smtp", "twilio", "africastalking"]


class AtSmsRequest(BaseModel):
    """JSON payload for the Africa's Talking messaging endpoint."""

    username: str
    to: str = Field(..., description="Recipient, or comma-separated list of recipients")
    message: str
    from_: Optional[str] = Field(default=None, alias="from", description="Sender ID")

    model_config = {"populate_by_name": True}

    def to_json(self) -> str:
        """Serialize with wire names, leaving out an empty sender ID."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class SMSMessageData(BaseModel):
    """Status block of an Africa's Talking send response."""

    message: str = Field(default="", alias="Message")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("message", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """A JSON null status decodes to an empty one."""
        return "" if v is None else v


class AtSmsResponse(BaseModel):
    """Response body of the Africa's Talking messaging endpoint."""

    sms_message_data: SMSMessageData = Field(
        default_factory=SMSMessageData, alias="SMSMessageData"
    )

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("sms_message_data", mode="before")
    @classmethod
    def null_as_empty_block(cls, v):
        return {} if v is None else v

    @property
    def status_text(self) -> str:
        """Human-readable status, e.g. 'Sent to 1/1 Total Cost: KES 0.8000'."""
        return self.sms_message_data.message


class DispatchResult(BaseModel):
    """Outcome of a successful send."""

    correlation_id: str = Field(..., description="Correlation ID of this dispatch")
    channel: Channel = Field(..., description="Channel the message went out on")
    recipients: List[str] = Field(default_factory=list, description="Addressed recipients")
    provider_status: Optional[str] = Field(
        default=None, description="Status text reported by the provider, if any"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "correlation_id": "msg_4f2a9c1b7e30",
                "channel": "africastalking",
                "recipients": ["+254711000000"],
                "provider_status": "Sent to 1/1 Total Cost: KES 0.8000",
            }
        }
    }
