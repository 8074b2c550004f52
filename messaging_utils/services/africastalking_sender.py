"""SMS through the Africa's Talking messaging REST endpoint."""

from typing import Optional, Tuple

import httpx
from pydantic import ValidationError

from ..exceptions import (
    AmbiguousOutcomeError,
    DisguisedFailureError,
    MessageValidationError,
    ProviderRejectionError,
    TransportError,
)
from ..models.config import AfricasTalkingConfig
from ..models.credentials import AfricasTalkingCredentials
from ..models.messages import AtSmsRequest, AtSmsResponse, DispatchResult
from ..utils.correlation import correlation_scope
from ..utils.logging import LoggerMixin

SUCCESS_STATUS_CODES = (200, 201)

# Africa's Talking answers 201 with this cost line when nothing was billed,
# which in practice means bad credentials. Matched verbatim.
ZERO_COST_MARKER = "Total Cost: KES 0.00"


def is_disguised_failure(status_text: str) -> bool:
    """Whether a successful-looking status text reports a zero-cost send."""
    return ZERO_COST_MARKER in status_text


class AfricasTalkingSender(LoggerMixin):
    """
    Posts a single SMS request and verifies the response body.

    The endpoint reports HTTP success for sends that never happened, so a
    send only counts as delivered once the JSON status text has been
    checked with is_disguised_failure.
    """

    channel = "africastalking"

    def __init__(
        self,
        config: Optional[AfricasTalkingConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or AfricasTalkingConfig()
        self._transport = transport

    def send(
        self,
        credentials: AfricasTalkingCredentials,
        message: Optional[str],
        receiver: Optional[str],
    ) -> DispatchResult:
        """
        Send one SMS.

        Args:
            credentials: API key, username and optional sender ID
            message: SMS text
            receiver: Phone number, or a comma-separated list of numbers

        Returns:
            DispatchResult carrying the provider's status text

        Raises:
            MessageValidationError: message or receiver missing
            TransportError: the request could not be executed
            ProviderRejectionError: status other than 200/201
            AmbiguousOutcomeError: success status with an unreadable body
            DisguisedFailureError: success status, but nothing was billed
        """
        if message is None:
            raise MessageValidationError("Message body cannot be empty")
        if not receiver:
            raise MessageValidationError("Receiver cannot be empty")

        payload = AtSmsRequest(
            username=credentials.username,
            to=receiver,
            message=message,
            from_=credentials.sender_id or None,
        )
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "apiKey": credentials.api_key,
        }

        with correlation_scope() as correlation_id:
            status_code, body = self._execute(payload, headers)
            status_text = self._interpret(status_code, body)

            self.log_info(
                f"SMS accepted by Africa's Talking: {status_text}",
                status_code=status_code,
            )

            return DispatchResult(
                correlation_id=correlation_id,
                channel=self.channel,
                recipients=[number.strip() for number in receiver.split(",")],
                provider_status=status_text,
            )

    def _execute(self, payload: AtSmsRequest, headers: dict) -> Tuple[int, bytes]:
        """POST the payload; the response is fully read and closed on return."""
        url = self.config.messaging_url

        try:
            with httpx.Client(
                timeout=self.config.timeout, transport=self._transport
            ) as client:
                with client.stream(
                    "POST", url, content=payload.to_json(), headers=headers
                ) as response:
                    return response.status_code, response.read()

        except httpx.RequestError as e:
            self.log_error(f"Africa's Talking request failed: {e} (type: {type(e).__name__})")
            raise TransportError(f"Failed to execute http request: {e}") from e

    def _interpret(self, status_code: int, body: bytes) -> str:
        """Map a raw response to its status text, raising on any failure."""
        if status_code not in SUCCESS_STATUS_CODES:
            body_text = body.decode("utf-8", errors="replace")
            self.log_error(
                f"Africa's Talking rejected request with status {status_code}",
                status_code=status_code,
            )
            raise ProviderRejectionError(
                f"Africa's talking API failed with status {status_code}. Response body: {body_text}",
                status_code=status_code,
                body=body_text,
            )

        try:
            at_response = AtSmsResponse.model_validate_json(body)
        except ValidationError as e:
            self.log_warning(
                "Africa's Talking returned success but the body could not be parsed",
                status_code=status_code,
            )
            raise AmbiguousOutcomeError(
                f"Successfully sent, but failed to parse response: {e}"
            ) from e

        status_text = at_response.status_text
        if is_disguised_failure(status_text):
            self.log_warning(f"Africa's Talking reported a zero-cost send: {status_text}")
            raise DisguisedFailureError(
                f"africa's talking send likely failed. Check API key/username. Response: {status_text}",
                provider_status=status_text,
            )

        return status_text


def send_africastalking_sms_message(
    credentials: AfricasTalkingCredentials,
    message: Optional[str],
    receiver: Optional[str],
) -> DispatchResult:
    """Send one SMS with a default-configured AfricasTalkingSender."""
    return AfricasTalkingSender().send(credentials, message, receiver)
