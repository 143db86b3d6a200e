from collections.abc import Callable

import aiosmtplib
import pytest
from _pytest.monkeypatch import MonkeyPatch
from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from portfolio.services.mail import MailService
from portfolio.settings import Settings, settings
from portfolio.utils.email import AUTHENTICATION_HINT, MailTransport


@pytest.fixture
def debug(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "debug", True)


@pytest.mark.parametrize("path", ["/api/debug/env", "/api/debug/mail"])
def test__debug__disabled(client: TestClient, monkeypatch: MonkeyPatch, path: str) -> None:
    monkeypatch.setattr(settings, "debug", False)

    response = client.get(path)

    assert response.status_code == 404
    assert response.json() == {"ok": False, "message": "Not found"}


def test__debug_env(client: TestClient, debug: None, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "mail_use_sandbox", False)
    monkeypatch.setattr(settings, "smtp_host", "smtp.example.com")
    monkeypatch.setattr(settings, "smtp_port", 465)
    monkeypatch.setattr(settings, "smtp_user", None)
    monkeypatch.setattr(settings, "smtp_pass", "super secret")
    monkeypatch.setattr(settings, "mail_to", None)
    monkeypatch.setattr(settings, "mail_from_email", None)

    response = client.get("/api/debug/env")

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "provider": "smtp",
        "has": {
            "SMTP_HOST": True,
            "SMTP_PORT": True,
            "SMTP_USER": False,
            "SMTP_PASS": True,
            "MAIL_TO": False,
            "MAIL_FROM_EMAIL": False,
        },
    }
    assert "super secret" not in response.text
    assert "smtp.example.com" not in response.text


def test__debug_env__sandbox(client: TestClient, debug: None, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "mail_use_sandbox", True)

    data = client.get("/api/debug/env").json()

    assert data["provider"] == "sandbox"
    assert set(data["has"]) == {
        "SANDBOX_SMTP_HOST",
        "SANDBOX_SMTP_PORT",
        "SANDBOX_SMTP_USER",
        "SANDBOX_SMTP_PASS",
        "MAIL_TO",
        "MAIL_FROM_EMAIL",
    }


def test__debug_mail(client: TestClient, debug: None, mail_service: MailService, mocker: MockerFixture) -> None:
    verify = mocker.patch.object(MailTransport, "verify")

    response = client.get("/api/debug/mail")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "verify": True}
    verify.assert_awaited_once()
    assert mail_service.transport is not None


def test__debug_mail__rebuilds_transport(
    client: TestClient, debug: None, mail_service: MailService, mocker: MockerFixture
) -> None:
    mocker.patch.object(MailTransport, "verify")
    assert mail_service.transport is None

    client.get("/api/debug/mail")
    first = mail_service.transport
    client.get("/api/debug/mail")

    assert first is not None
    assert mail_service.transport is not first


def test__debug_mail__failure(
    client: TestClient, debug: None, mail_service: MailService, mocker: MockerFixture
) -> None:
    mocker.patch.object(
        MailTransport, "verify", side_effect=aiosmtplib.SMTPAuthenticationError(535, "5.7.8 Bad credentials")
    )

    response = client.get("/api/debug/mail")

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": AUTHENTICATION_HINT}


def test__debug_mail__not_configured(
    client: TestClient, debug: None, mail_service: MailService, make_settings: Callable[..., Settings]
) -> None:
    mail_service.settings = make_settings()

    response = client.get("/api/debug/mail")

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Email is not configured on the server."}
    assert "SMTP_" not in response.text
