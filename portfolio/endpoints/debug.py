"""Diagnostic endpoints for the mail setup (only available in debug mode)"""

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..exceptions.contact import EmailNotConfiguredError
from ..exceptions.debug import DebugDisabledError
from ..logger import get_logger
from ..schemas.debug import DebugEnvResponse, DebugMailResponse
from ..services.mail import MailService, get_mail_service
from ..settings import settings
from ..utils.docs import responses
from ..utils.email import MailConfigurationError, configuration_status, error_hint, select_provider


logger = get_logger(__name__)


def require_debug() -> None:
    if not settings.debug:
        raise DebugDisabledError


router = APIRouter(tags=["debug"], dependencies=[Depends(require_debug)])


@router.get("/debug/env", responses=responses(DebugEnvResponse, DebugDisabledError))
async def debug_env() -> Any:
    """Report which mail settings are present for the selected provider. Values are never returned."""

    return {"ok": True, "provider": select_provider(settings).name, "has": configuration_status(settings)}


@router.get("/debug/mail", responses=responses(DebugMailResponse, DebugDisabledError))
async def debug_mail(mail: MailService = Depends(get_mail_service)) -> Any:
    """Rebuild the mail transport from the current settings and verify the connection and login."""

    try:
        await mail.verify()
    except MailConfigurationError as e:
        logger.warning(f"Email is not configured: {e}")
        error = EmailNotConfiguredError.detail
    except Exception as e:
        logger.error(f"Mail transport verification failed: {e!r}")
        error = error_hint(e)
    else:
        return {"ok": True, "verify": True}

    return JSONResponse({"ok": False, "error": error}, status.HTTP_500_INTERNAL_SERVER_ERROR)
