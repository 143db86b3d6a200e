import asyncio
import re
import socket
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from pathlib import Path
from typing import Any

import aiosmtplib
from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from ..logger import get_logger
from ..schemas.contact import ContactSubmission
from ..settings import Settings


logger = get_logger(__name__)


def nl2br(value: str) -> Markup:
    return Markup("<br/>").join(escape(line) for line in value.split("\n"))


env = Environment(loader=FileSystemLoader(Path(__file__).parent.parent / "templates"), autoescape=True)
env.filters["nl2br"] = nl2br


IMPLICIT_TLS_PORTS = {465}
STARTTLS_PORTS = {587, 25}

LINE_BREAKS = re.compile(r"[\r\n]+")

REQUIRED_KEYS = ("host", "port", "user", "pass")
OPTIONAL_KEYS = ("mail_to", "mail_from_email")


class MailConfigurationError(Exception):
    def __init__(self, provider: str, missing: list[str]) -> None:
        super().__init__(f"Missing mail configuration for provider '{provider}': {', '.join(missing)}")
        self.provider = provider
        self.missing = missing


@dataclass(frozen=True)
class ProviderProfile:
    name: str
    prefix: str

    def key(self, name: str) -> str:
        return f"{self.prefix}_{name}"

    def value(self, settings: Settings, name: str) -> Any:
        return getattr(settings, self.key(name))


PRIMARY = ProviderProfile(name="smtp", prefix="smtp")
SANDBOX = ProviderProfile(name="sandbox", prefix="sandbox_smtp")


def select_provider(settings: Settings) -> ProviderProfile:
    return SANDBOX if settings.mail_use_sandbox else PRIMARY


def resolve_security(port: int, secure: bool) -> tuple[bool, bool | None]:
    """
    Return the `(use_tls, start_tls)` pair for the given port.

    Port 465 always uses implicit TLS. Ports 587 and 25 never do and upgrade via STARTTLS if the server offers it.
    Any other port uses the configured flag as is.
    """

    if port in IMPLICIT_TLS_PORTS:
        return True, False
    if port in STARTTLS_PORTS:
        return False, None
    return secure, False if secure else None


def configuration_status(settings: Settings) -> dict[str, bool]:
    provider = select_provider(settings)
    keys = [provider.key(name) for name in REQUIRED_KEYS] + list(OPTIONAL_KEYS)
    return {key.upper(): getattr(settings, key) not in (None, "") for key in keys}


@dataclass(frozen=True)
class MailTransportConfig:
    provider: str
    host: str
    port: int
    use_tls: bool
    start_tls: bool | None
    username: str
    password: str
    from_name: str
    from_address: str
    recipient: str
    timeout: float


def resolve_transport_config(settings: Settings) -> MailTransportConfig:
    provider = select_provider(settings)

    missing = [provider.key(name).upper() for name in REQUIRED_KEYS if provider.value(settings, name) in (None, "")]
    if missing:
        raise MailConfigurationError(provider.name, missing)

    port = int(provider.value(settings, "port"))
    use_tls, start_tls = resolve_security(port, provider.value(settings, "secure"))
    username = provider.value(settings, "user").strip()

    return MailTransportConfig(
        provider=provider.name,
        host=provider.value(settings, "host").strip(),
        port=port,
        use_tls=use_tls,
        start_tls=start_tls,
        username=username,
        password="".join(provider.value(settings, "pass").split()),
        from_name=settings.mail_from_name,
        from_address=settings.mail_from_email or username,
        recipient=settings.mail_to or username,
        timeout=settings.mail_send_timeout,
    )


class MailTransport:
    def __init__(self, config: MailTransportConfig) -> None:
        self.config = config

    def _connection(self) -> dict[str, Any]:
        return {
            "hostname": self.config.host,
            "port": self.config.port,
            "username": self.config.username,
            "password": self.config.password,
            "use_tls": self.config.use_tls,
            "start_tls": self.config.start_tls,
            "timeout": self.config.timeout,
        }

    async def send(self, message: MIMEMultipart) -> str:
        logger.debug(f"Sending email via {self.config.provider} to {message['To']} ({message['Subject']})")

        await asyncio.wait_for(aiosmtplib.send(message, **self._connection()), self.config.timeout)
        return message["Message-ID"]

    async def verify(self) -> None:
        async with aiosmtplib.SMTP(**self._connection()) as smtp:
            await asyncio.wait_for(smtp.noop(), self.config.timeout)


def build_transport(settings: Settings) -> MailTransport:
    return MailTransport(resolve_transport_config(settings))


def header_value(value: str) -> str:
    return LINE_BREAKS.sub(" ", value)


def compose_message(submission: ContactSubmission, config: MailTransportConfig) -> MIMEMultipart:
    subject = f"Portfolio Inquiry — {header_value(submission.name)}"
    if submission.company:
        subject += f" · {header_value(submission.company)}"

    text = f"From: {submission.name} <{submission.email}>\nCompany: {submission.company or '-'}\n\n{submission.message}"
    html = env.get_template("contact_inquiry.html").render(**submission.model_dump())

    message = MIMEMultipart("alternative")
    message["From"] = formataddr((config.from_name, config.from_address))
    message["To"] = config.recipient
    message["Reply-To"] = formataddr((header_value(submission.name), submission.email))
    message["Subject"] = subject
    message["Message-ID"] = make_msgid(domain=config.from_address.rpartition("@")[2] or None)
    message.attach(MIMEText(text, "plain", "utf-8"))
    message.attach(MIMEText(html, "html", "utf-8"))
    return message


AUTHENTICATION_HINT = "Email login failed. Please check the mail account credentials."
HOST_NOT_FOUND_HINT = "Email server could not be found. Please check the mail host setting."
CONNECTION_HINT = "Could not connect to the email server. Please check the host, port and security settings."
REJECTED_HINT = "Email provider rejected the message. Please check the mail account credentials."
DEFAULT_HINT = "Failed to send message. Try later."

# first match wins, subclasses before their bases
ERROR_HINTS: list[tuple[type[BaseException], str]] = [
    (aiosmtplib.SMTPAuthenticationError, AUTHENTICATION_HINT),
    (aiosmtplib.SMTPConnectError, CONNECTION_HINT),
    (aiosmtplib.SMTPServerDisconnected, CONNECTION_HINT),
    (aiosmtplib.SMTPResponseException, REJECTED_HINT),
    (aiosmtplib.SMTPRecipientsRefused, REJECTED_HINT),
    (ConnectionError, CONNECTION_HINT),
]


def _causes(exc: BaseException) -> list[BaseException]:
    chain = [exc]
    while (cause := chain[-1].__cause__ or chain[-1].__context__) is not None and cause not in chain:
        chain.append(cause)
    return chain


def error_hint(exc: BaseException) -> str:
    """Map a send or verify failure to a message that is safe to show to the sender."""

    if any(isinstance(cause, socket.gaierror) for cause in _causes(exc)):
        return HOST_NOT_FOUND_HINT

    for exc_type, hint in ERROR_HINTS:
        if isinstance(exc, exc_type):
            return hint
    return DEFAULT_HINT
