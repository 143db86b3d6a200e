from pydantic import BaseModel

from ..utils.docs import example


class HealthResponse(BaseModel):
    ok: bool

    model_config = example(ok=True)
