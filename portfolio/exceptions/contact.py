from typing import Any

from fastapi import status
from pydantic import BaseModel

from .api_exception import APIException
from ..schemas.contact import InvalidSubmissionResponse


class InvalidRequestBodyError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request body."
    description = "The request body is not a JSON object with string fields."


class InvalidSubmissionError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Please correct the highlighted fields."
    description = "One or more contact form fields are invalid."

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__()
        self.errors = errors

    @property
    def content(self) -> dict[str, Any]:
        return {"ok": False, "errors": self.errors}

    @classmethod
    def response_model(cls) -> type[BaseModel]:
        return InvalidSubmissionResponse


class SpamDetectedError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Spam detected."
    description = "The submission was rejected."


class EmailNotConfiguredError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Email is not configured on the server."
    description = "No mail transport is available."


class CouldNotSendMessageError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Failed to send message. Try later."
    description = "The message could not be sent."

    def __init__(self, hint: str | None = None) -> None:
        super().__init__()
        if hint:
            self.detail = hint
