from functools import cache
from typing import Any

from fastapi import HTTPException
from pydantic import BaseModel, ConfigDict, create_model


class APIException(HTTPException):
    status_code: int
    detail: str
    description: str | None = None

    def __init__(self) -> None:
        super().__init__(self.status_code, self.detail)

    @property
    def content(self) -> dict[str, Any]:
        return {"ok": False, "message": self.detail}

    @classmethod
    @cache
    def response_model(cls) -> type[BaseModel]:
        return create_model(
            cls.__name__,
            ok=(bool, False),
            message=(str, cls.detail),
            __config__=ConfigDict(json_schema_extra={"example": {"ok": False, "message": cls.detail}}),
        )
