from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    fdw_base_url: str | None = Field(default=None, alias="FDW_BASE_URL")
    fdw_access_token: str | None = Field(default=None, alias="FDW_ACCESS_TOKEN")
    app_http_debug: bool = Field(default=False, alias="APP_HTTP_DEBUG")
    app_http_max_attempts: int = Field(default=1, alias="APP_HTTP_MAX_ATTEMPTS")
    app_http_read_timeout_seconds: float = Field(
        default=60.0,
        alias="APP_HTTP_READ_TIMEOUT_SECONDS",
    )

    def server_options(self) -> dict[str, str]:
        options: dict[str, str] = {}
        if self.fdw_base_url:
            options["base_url"] = self.fdw_base_url
        if self.fdw_access_token:
            options["access_token"] = self.fdw_access_token
        return options

    @model_validator(mode="after")
    def normalize(self) -> "AppSettings":
        if self.fdw_base_url is not None:
            self.fdw_base_url = self.fdw_base_url.strip().rstrip("/") or None
        if self.fdw_access_token is not None:
            self.fdw_access_token = self.fdw_access_token.strip() or None
        self.app_http_max_attempts = max(self.app_http_max_attempts, 1)
        return self
