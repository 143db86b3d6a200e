from typing import Any

from pydantic import ConfigDict

from ..exceptions.api_exception import APIException


def example(**kwargs: Any) -> ConfigDict:
    return ConfigDict(json_schema_extra={"example": kwargs})


def responses(default: type, *args: type[APIException]) -> dict[int | str, dict[str, Any]]:
    exceptions: dict[int, list[type[APIException]]] = {}
    for exc in args:
        exceptions.setdefault(exc.status_code, []).append(exc)

    return {
        200: {"model": default},
        **{
            code: {
                "description": " / ".join(exc.description or exc.detail for exc in excs),
                "model": excs[0].response_model(),
            }
            for code, excs in exceptions.items()
        },
    }
