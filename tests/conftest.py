import pytest
from fastapi.testclient import TestClient

from absolute_api.core.config import Settings
from absolute_api.core.email_provider import EmailDeliveryError, EmailProvider
from absolute_api.main import create_app


class FakeEmailProvider(EmailProvider):
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    async def send(self, email):
        self.sent.append(email)
        if self.error is not None:
            raise self.error
        return {"id": f"fake-{len(self.sent)}"}


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        resend_api_key="re_test",
        my_email="owner@absolute.example",
        email_from="onboarding@resend.dev",
    )


@pytest.fixture
def make_provider():
    return FakeEmailProvider


@pytest.fixture
def provider():
    return FakeEmailProvider()


@pytest.fixture
def failing_provider():
    return FakeEmailProvider(error=EmailDeliveryError("quota exceeded", status_code=429))


@pytest.fixture
def client(settings, provider):
    return TestClient(create_app(settings, provider))


@pytest.fixture
def valid_payload():
    return {
        "name": "Jane",
        "email": "jane@x.com",
        "phone": "+1555",
        "message": "Hi",
        "privacyAgreed": True,
    }
