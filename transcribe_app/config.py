from pydantic_settings import BaseSettings
from pydantic import Field
from typing import FrozenSet

class Settings(BaseSettings):
    app_env: str = Field("dev", alias="APP_ENV")
    app_host: str = Field("0.0.0.0", alias="APP_HOST")
    app_port: int = Field(8000, alias="APP_PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # --- CORS (comma-separated) ---
    cors_allowed_origins: str = Field(
        "http://localhost:4200,https://adaratranslate.com",
        alias="CORS_ALLOWED_ORIGINS",
    )
    cors_allow_methods: str = Field("GET, POST, OPTIONS", alias="CORS_ALLOW_METHODS")
    cors_path_prefix: str = Field("/api/", alias="CORS_PATH_PREFIX")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def allowed_origins(self) -> FrozenSet[str]:
        return frozenset(x.strip() for x in self.cors_allowed_origins.split(",") if x.strip())

settings = Settings()
