"""SMS through the Twilio Messages API."""

from typing import Optional

import requests
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from ..exceptions import MessageValidationError, ProviderRejectionError, TransportError
from ..models.config import TwilioSenderConfig
from ..models.credentials import TwilioCredentials
from ..models.messages import DispatchResult
from ..utils.correlation import correlation_scope
from ..utils.logging import LoggerMixin


class TwilioSender(LoggerMixin):
    """Submits one message-create request per send."""

    channel = "twilio"

    def __init__(self, config: Optional[TwilioSenderConfig] = None):
        self.config = config or TwilioSenderConfig()

    def send(
        self,
        credentials: TwilioCredentials,
        message: Optional[str],
        receiver: Optional[str],
    ) -> DispatchResult:
        """
        Send one SMS from the account's sender number.

        The created message resource is discarded; only failures are
        reported.

        Raises:
            MessageValidationError: message or receiver missing
            ProviderRejectionError: Twilio rejected the request
            TransportError: Twilio could not be reached
        """
        if message is None or not receiver:
            raise MessageValidationError("Message body and receivers cannot be empty")

        with correlation_scope() as correlation_id:
            client = self._create_client(credentials)

            try:
                client.messages.create(
                    body=message,
                    from_=credentials.sender_phone_number,
                    to=receiver,
                )
            except TwilioRestException as e:
                self.log_error(
                    f"Twilio rejected message: {e.msg} (status: {e.status}, code: {e.code})"
                )
                raise ProviderRejectionError(
                    f"Twilio API failed with status {e.status}: {e.msg}",
                    status_code=e.status,
                    body=str(e.msg),
                ) from e
            except (TwilioException, requests.RequestException) as e:
                self.log_error(f"Failed to reach Twilio: {e} (type: {type(e).__name__})")
                raise TransportError(f"Failed to execute Twilio request: {e}") from e

            self.log_info(f"SMS submitted to Twilio from {credentials.sender_phone_number}")

            return DispatchResult(
                correlation_id=correlation_id,
                channel=self.channel,
                recipients=[receiver],
            )

    def _create_client(self, credentials: TwilioCredentials) -> Client:
        """Create a REST client authenticating with SID and token."""
        http_client = None
        if self.config.timeout is not None:
            http_client = TwilioHttpClient(timeout=self.config.timeout)
        return Client(
            credentials.account_sid, credentials.auth_token, http_client=http_client
        )


def send_twilio_sms_message(
    credentials: TwilioCredentials,
    message: Optional[str],
    receiver: Optional[str],
) -> DispatchResult:
    """Send one SMS with a default-configured TwilioSender."""
    return TwilioSender().send(credentials, message, receiver)
