from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CH_BASE_URL = "https://api.company-information.service.gov.uk"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    cors_origins: str = ""
    shared_secret: str = ""
    auth_header: str = Field(default="x-ch-secret", min_length=1)
    ch_api_key: str = ""
    ch_base_url: str = Field(default=CH_BASE_URL, pattern=r"^https?://")
    ch_timeout_seconds: float = Field(default=10.0, gt=0)
    rate_limit_rpm: int = Field(default=60, ge=1)
    port: int = Field(default=3000, ge=1, le=65535)

    @property
    def allowed_origins(self) -> frozenset[str]:
        """Comma-separated CORS_ORIGINS as a set; empty means any origin."""
        return frozenset(o.strip() for o in self.cors_origins.split(",") if o.strip())


settings = Settings()
