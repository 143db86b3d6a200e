from collections.abc import Callable, Iterator
from email.mime.multipart import MIMEMultipart
from typing import Any

import pytest
from fastapi.testclient import TestClient

from portfolio.app import app
from portfolio.services.mail import MailService, get_mail_service
from portfolio.settings import Settings
from portfolio.utils.email import MailTransport, resolve_transport_config


MAIL_KEYS = [
    "smtp_host",
    "smtp_port",
    "smtp_user",
    "smtp_pass",
    "sandbox_smtp_host",
    "sandbox_smtp_port",
    "sandbox_smtp_user",
    "sandbox_smtp_pass",
    "mail_to",
    "mail_from_email",
]


def make_settings(**kwargs: Any) -> Settings:
    return Settings(_env_file=None, **({key: None for key in MAIL_KEYS} | kwargs))  # type: ignore[call-arg]


def configured_settings(**kwargs: Any) -> Settings:
    return make_settings(
        **{"smtp_host": "smtp.example.com", "smtp_port": 587, "smtp_user": "me@example.com", "smtp_pass": "secret"}
        | kwargs
    )


class FakeTransport(MailTransport):
    def __init__(self, settings: Settings, error: Exception | None = None) -> None:
        super().__init__(resolve_transport_config(settings))
        self.error = error
        self.sent: list[MIMEMultipart] = []

    async def send(self, message: MIMEMultipart) -> str:
        if self.error:
            raise self.error
        self.sent.append(message)
        return message["Message-ID"]

    async def verify(self) -> None:
        if self.error:
            raise self.error


@pytest.fixture
def client() -> Iterator[TestClient]:
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mail_service() -> MailService:
    service = MailService(configured_settings())
    app.dependency_overrides[get_mail_service] = lambda: service
    return service


@pytest.fixture(name="make_settings")
def make_settings_fixture() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture(name="configured_settings")
def configured_settings_fixture() -> Callable[..., Settings]:
    return configured_settings


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    return FakeTransport
