from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    root_path: str = ""

    debug: bool = False
    reload: bool = False

    static_dir: Path = Path(__file__).parent / "public"

    mail_use_sandbox: bool = False

    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_secure: bool = False
    smtp_user: str | None = None
    smtp_pass: str | None = None

    sandbox_smtp_host: str | None = None
    sandbox_smtp_port: int | None = None
    sandbox_smtp_secure: bool = False
    sandbox_smtp_user: str | None = None
    sandbox_smtp_pass: str | None = None

    mail_from_name: str = "Portfolio"
    mail_from_email: str | None = None
    mail_to: str | None = None
    mail_send_timeout: float = Field(15, gt=0, le=120)
    mail_verify_on_startup: bool = True

    contact_first_error_only: bool = False

    sentry_dsn: str | None = None
    sentry_environment: str = "test"


settings = Settings()
