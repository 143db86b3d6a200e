from fastapi import status

from .api_exception import APIException


class DebugDisabledError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"
    description = "Debug endpoints are disabled."
