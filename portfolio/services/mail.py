from fastapi import Request

from ..exceptions.contact import CouldNotSendMessageError, EmailNotConfiguredError
from ..logger import get_logger
from ..schemas.contact import ContactSubmission
from ..settings import Settings
from ..utils.email import MailConfigurationError, MailTransport, build_transport, compose_message, error_hint


logger = get_logger(__name__)


class MailService:
    """
    Holder of the current mail transport.

    The transport is replaced as a whole by assigning a new handle, so a send that already picked up the old handle
    finishes with it.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.transport: MailTransport | None = None

    def rebuild(self) -> MailTransport:
        transport = build_transport(self.settings)
        self.transport = transport
        logger.info(f"Mail transport ready ({transport.config.provider}: {transport.config.host}:{transport.config.port})")
        return transport

    async def startup(self) -> None:
        try:
            transport = self.rebuild()
        except MailConfigurationError as e:
            logger.error(f"Email is not configured: {e}")
            return

        if not self.settings.mail_verify_on_startup:
            return

        try:
            await transport.verify()
        except Exception as e:
            logger.error(f"Mail transport verification failed ({error_hint(e)}): {e!r}")
        else:
            logger.info("Mail transport verified")

    async def verify(self) -> None:
        """Rebuild the transport from the current settings and check that the server accepts the credentials."""

        await self.rebuild().verify()

    async def send(self, submission: ContactSubmission) -> str:
        if not (transport := self.transport):
            raise EmailNotConfiguredError

        message = compose_message(submission, transport.config)
        try:
            return await transport.send(message)
        except Exception as e:
            logger.error(f"Mailer error: {e!r}")
            raise CouldNotSendMessageError(error_hint(e)) from e


def get_mail_service(request: Request) -> MailService:
    return request.app.state.mail  # type: ignore[no-any-return]
