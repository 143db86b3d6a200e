"""Endpoints for the contact form"""

from typing import Any

from fastapi import APIRouter, Depends

from ..exceptions.contact import (
    CouldNotSendMessageError,
    EmailNotConfiguredError,
    InvalidSubmissionError,
    SpamDetectedError,
)
from ..schemas.contact import ContactForm, ContactResponse
from ..services.mail import MailService, get_mail_service
from ..settings import settings
from ..utils.docs import responses
from ..utils.validation import validate_submission


router = APIRouter(tags=["contact"])


@router.post(
    "/contact",
    responses=responses(
        ContactResponse, InvalidSubmissionError, SpamDetectedError, EmailNotConfiguredError, CouldNotSendMessageError
    ),
)
async def send_message(data: ContactForm, mail: MailService = Depends(get_mail_service)) -> Any:
    """
    Send a contact form message to the site owner.

    The message is forwarded by email with the sender as reply-to address. Field errors are returned per field;
    depending on the server configuration only the first invalid field is reported.
    """

    submission = validate_submission(data.model_dump(), first_error_only=settings.contact_first_error_only)
    message_id = await mail.send(submission)

    return {"ok": True, "message": "Thank you! Your message has been sent.", "messageId": message_id}
