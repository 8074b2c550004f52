"""Pytest configuration and fixtures."""

import io
import smtplib

import httpx
import pytest

from messaging_utils.models.config import AfricasTalkingConfig
from messaging_utils.models.credentials import (
    AfricasTalkingCredentials,
    EmailAttachment,
    SMTPCredentials,
    TwilioCredentials,
)
from messaging_utils.services.africastalking_sender import AfricasTalkingSender


@pytest.fixture
def smtp_credentials():
    """Create SMTP credentials for a plain submission port."""
    return SMTPCredentials(
        host="smtp.test.com",
        port="587",
        username="mailer@test.com",
        sender="alerts@test.com",
        password="password",
        use_tls=False,
    )


@pytest.fixture
def sample_pdf_data():
    """Bytes covering every octet value, to catch any encoding loss."""
    return b"%PDF-1.4\n" + bytes(range(256))


@pytest.fixture
def pdf_attachment(sample_pdf_data):
    """Create an attachment backed by an in-memory stream."""
    return EmailAttachment(data=io.BytesIO(sample_pdf_data), name="invoice.pdf")


@pytest.fixture
def twilio_credentials():
    """Create Twilio credentials."""
    return TwilioCredentials(
        account_sid="AC00000000000000000000000000000000",
        auth_token="token",
        sender_phone_number="+15005550006",
        sender_name="Alerts",
    )


@pytest.fixture
def at_credentials():
    """Create Africa's Talking credentials."""
    return AfricasTalkingCredentials(
        api_key="at-api-key",
        username="sandbox",
        sender_id="ALERTS",
    )


class SMTPRecorder:
    """Shared state for the mocked SMTP connections."""

    def __init__(self):
        self.instances = []
        self.starttls_supported = False
        self.connect_error = None
        self.login_error = None
        self.auth_supported = True
        self.refused = {}


@pytest.fixture
def mock_smtp_server(monkeypatch):
    """Mock SMTP server for testing email sending."""
    recorder = SMTPRecorder()

    class MockSMTP:
        def __init__(self, host, port, timeout=None, context=None, implicit_tls=False):
            self.host = host
            self.port = port
            self.timeout = timeout
            self.implicit_tls = implicit_tls
            self.ehlo_called = False
            self.tls_started = False
            self.logged_in_as = None
            self.messages_sent = []
            self.closed = False

        def __enter__(self):
            return self

        def __exit__(self, *args):
            self.quit()

        def ehlo(self, name=""):
            self.ehlo_called = True
            return (250, b"smtp.test.com")

        def has_extn(self, opt):
            opt = opt.lower()
            if opt == "auth":
                return recorder.auth_supported
            return recorder.starttls_supported and opt == "starttls"

        def starttls(self, context=None):
            if not recorder.starttls_supported:
                raise smtplib.SMTPNotSupportedError(
                    "STARTTLS extension not supported by server."
                )
            self.tls_started = True

        def login(self, user, password):
            if recorder.login_error:
                raise recorder.login_error
            self.logged_in_as = user

        def send_message(self, msg, to_addrs=None):
            self.messages_sent.append({"message": msg, "to_addrs": to_addrs or []})
            return dict(recorder.refused)

        def quit(self):
            self.closed = True

    def mock_smtp(host, port, timeout=None):
        if recorder.connect_error:
            raise recorder.connect_error
        instance = MockSMTP(host, port, timeout=timeout)
        recorder.instances.append(instance)
        return instance

    def mock_smtp_ssl(host, port, context=None, timeout=None):
        if recorder.connect_error:
            raise recorder.connect_error
        instance = MockSMTP(host, port, timeout=timeout, context=context, implicit_tls=True)
        recorder.instances.append(instance)
        return instance

    monkeypatch.setattr("smtplib.SMTP", mock_smtp)
    monkeypatch.setattr("smtplib.SMTP_SSL", mock_smtp_ssl)

    return recorder


class TwilioRecorder:
    """Calls made against the mocked Twilio client."""

    def __init__(self):
        self.clients = []
        self.created = []
        self.error = None


@pytest.fixture
def mock_twilio_client(monkeypatch):
    """Mock the Twilio REST client used by the sender."""
    recorder = TwilioRecorder()

    class MockMessages:
        def create(self, body=None, from_=None, to=None):
            if recorder.error:
                raise recorder.error
            recorder.created.append({"body": body, "from_": from_, "to": to})
            return {"sid": "SM00000000000000000000000000000000"}

    class MockClient:
        def __init__(self, username=None, password=None, http_client=None):
            self.username = username
            self.password = password
            self.http_client = http_client
            self.messages = MockMessages()
            recorder.clients.append(self)

    monkeypatch.setattr("messaging_utils.services.twilio_sender.Client", MockClient)

    return recorder


class ATRecorder:
    """Canned response and captured requests for the Africa's Talking mock."""

    def __init__(self):
        self.requests = []
        self.status_code = 201
        self.body = b'{"SMSMessageData": {"Message": "Sent to 1/1 Total Cost: KES 0.8000"}}'
        self.headers = {}
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            raise self.error
        return httpx.Response(self.status_code, headers=self.headers, content=self.body)


@pytest.fixture
def at_server():
    """Create a recorder serving Africa's Talking responses."""
    return ATRecorder()


@pytest.fixture
def at_sender(at_server):
    """Create an Africa's Talking sender wired to the mock transport."""
    return AfricasTalkingSender(
        AfricasTalkingConfig(),
        transport=httpx.MockTransport(at_server.handler),
    )
