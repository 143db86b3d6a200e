from pydantic import BaseModel, Field

from ..utils.docs import example


class DebugEnvResponse(BaseModel):
    ok: bool
    provider: str = Field(description="Selected mail provider profile")
    has: dict[str, bool] = Field(description="Whether each mail setting is present")

    model_config = example(
        ok=True,
        provider="smtp",
        has={"SMTP_HOST": True, "SMTP_PORT": True, "SMTP_USER": True, "SMTP_PASS": False, "MAIL_TO": False},
    )


class DebugMailResponse(BaseModel):
    ok: bool
    verify: bool | None = Field(None, description="Set if the mail server accepted the connection and login")
    error: str | None = Field(None, description="Hint why the verification failed")

    model_config = example(ok=True, verify=True)
