"""Contact form validation rules. Keep in sync with public/script.js."""

import re
from typing import Any

from ..exceptions.contact import InvalidSubmissionError, SpamDetectedError
from ..schemas.contact import ContactSubmission


EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$", re.IGNORECASE)

NAME_MIN_LENGTH = 2
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 4000

NAME_ERROR = "Please enter your full name."
EMAIL_ERROR = "Please enter a valid email address."
MESSAGE_TOO_SHORT_ERROR = f"Message should be at least {MESSAGE_MIN_LENGTH} characters."
MESSAGE_TOO_LONG_ERROR = f"Message too long (max {MESSAGE_MAX_LENGTH} characters)."


def clean(value: Any) -> str:
    return str(value or "").strip()


def is_email(value: str) -> bool:
    return bool(EMAIL_REGEX.match(value))


def validate_submission(data: dict[str, Any], *, first_error_only: bool = False) -> ContactSubmission:
    """
    Validate and normalize the raw fields of a contact form.

    Every field is checked and all errors are reported unless `first_error_only` is set, in which case only the
    first failing field (name, email, message) is reported. A filled in honeypot rejects the submission before any
    field is looked at.
    """

    if data.get("honeypot"):
        raise SpamDetectedError

    name = clean(data.get("name"))
    email = clean(data.get("email"))
    company = clean(data.get("company"))
    message = clean(data.get("message"))

    errors: dict[str, str] = {}
    if len(name) < NAME_MIN_LENGTH:
        errors["name"] = NAME_ERROR
    if not is_email(email):
        errors["email"] = EMAIL_ERROR
    if len(message) < MESSAGE_MIN_LENGTH:
        errors["message"] = MESSAGE_TOO_SHORT_ERROR
    elif len(message) > MESSAGE_MAX_LENGTH:
        errors["message"] = MESSAGE_TOO_LONG_ERROR

    if errors:
        if first_error_only:
            field = next(iter(errors))
            errors = {field: errors[field]}
        raise InvalidSubmissionError(errors)

    return ContactSubmission(name=name, email=email, company=company, message=message)
