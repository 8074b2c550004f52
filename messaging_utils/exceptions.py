"""Error types raised by the message senders."""

from typing import Optional


class MessagingError(Exception):
    """Base class for every dispatch failure."""


class MessageValidationError(MessagingError):
    """A required field was missing; raised before any network call."""


class ConfigurationError(MessagingError):
    """Input that cannot be turned into a request, e.g. a non-numeric port."""


class TransportError(MessagingError):
    """Network, authentication or TLS failure while contacting a provider."""


class ProviderRejectionError(MessagingError):
    """The provider answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AmbiguousOutcomeError(MessagingError):
    """
    HTTP success, but the response body could not be parsed.

    The message may have been delivered; callers should treat this as a
    failure to confirm rather than a failure to send.
    """


class DisguisedFailureError(MessagingError):
    """HTTP success with a body showing the send did not take effect."""

    def __init__(self, message: str, provider_status: str = ""):
        super().__init__(message)
        self.provider_status = provider_status
