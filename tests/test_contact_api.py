import pytest
from fastapi.testclient import TestClient

from absolute_api.main import create_app


def test_root_reports_liveness(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "running" in response.text


def test_health_hides_secret_values(client):
    response = client.get("/api/health")
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "ok"
    assert body["env_vars"] == {"resend_api_key": True, "my_email": True}
    assert "re_test" not in response.text


def test_valid_submission_is_sent_once(client, provider, valid_payload):
    response = client.post("/api/contact", json=valid_payload)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Email sent successfully"}
    assert len(provider.sent) == 1
    email = provider.sent[0]
    assert email.reply_to == "jane@x.com"
    assert "Jane" in email.subject
    assert email.to == "owner@absolute.example"


@pytest.mark.parametrize("field", ["name", "email", "phone", "message"])
def test_missing_field_is_rejected(client, provider, valid_payload, field):
    del valid_payload[field]
    response = client.post("/api/contact", json=valid_payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "All fields are required"}
    assert provider.sent == []


def test_empty_email_is_rejected(client, provider):
    response = client.post(
        "/api/contact",
        json={"name": "Jane", "email": "", "phone": "+1555", "message": "Hi"},
    )
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert provider.sent == []


def test_malformed_body_is_rejected(client, provider):
    response = client.post(
        "/api/contact",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "All fields are required"
    assert provider.sent == []


def test_wrongly_typed_field_is_rejected(client, provider, valid_payload):
    valid_payload["name"] = {"first": "Jane"}
    response = client.post("/api/contact", json=valid_payload)
    assert response.status_code == 400
    assert provider.sent == []


def test_missing_privacy_flag_is_accepted(client, provider, valid_payload):
    del valid_payload["privacyAgreed"]
    response = client.post("/api/contact", json=valid_payload)
    assert response.status_code == 200
    assert "Privacy Policy Agreed:</strong> No" in provider.sent[0].html


def test_unticked_privacy_flag_is_accepted(client, provider, valid_payload):
    valid_payload["privacyAgreed"] = False
    response = client.post("/api/contact", json=valid_payload)
    assert response.status_code == 200
    assert "Privacy Policy Agreed:</strong> No" in provider.sent[0].html
    assert "Privacy Policy Agreed: No" in provider.sent[0].text


@pytest.mark.parametrize(
    "flag, shown",
    [("agreed", "Yes"), (2, "Yes"), ([], "No"), ({"v": True}, "Yes"), (None, "No")],
)
def test_privacy_flag_of_any_type_is_relayed(client, provider, valid_payload, flag, shown):
    valid_payload["privacyAgreed"] = flag
    response = client.post("/api/contact", json=valid_payload)
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert f"Privacy Policy Agreed:</strong> {shown}" in provider.sent[0].html


def test_delivery_failure_returns_500_and_server_keeps_serving(settings, failing_provider, valid_payload):
    client = TestClient(create_app(settings, failing_provider))

    response = client.post("/api/contact", json=valid_payload)
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to send email"}
    assert "quota" not in response.text

    failing_provider.error = None
    response = client.post("/api/contact", json=valid_payload)
    assert response.status_code == 200
    assert len(failing_provider.sent) == 2


def test_unexpected_provider_exception_is_contained(settings, make_provider, valid_payload):
    client = TestClient(create_app(settings, make_provider(error=RuntimeError("boom"))))
    response = client.post("/api/contact", json=valid_payload)
    assert response.status_code == 500
    assert "boom" not in response.text


def test_identical_submissions_are_not_deduplicated(client, provider, valid_payload):
    client.post("/api/contact", json=valid_payload)
    client.post("/api/contact", json=valid_payload)
    assert len(provider.sent) == 2


def test_cors_allows_any_origin(client, valid_payload):
    response = client.options(
        "/api/contact",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")
