import os
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class Settings(BaseModel):
    """Application settings, read from the environment."""

    host: str = "0.0.0.0"
    port: int = 8085
    api_key: str = ""
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = ("*",)

    model_config = ConfigDict(frozen=True)

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8085")),
            api_key=os.getenv("API_KEY", ""),
            app_env=os.getenv("APP_ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        )


_settings_instance = None


def get_settings() -> Settings:
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings.from_env()
    return _settings_instance
