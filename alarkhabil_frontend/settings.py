from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Server
    LISTEN_HOST: str = "127.0.0.1"
    LISTEN_PORT: int = 7780

    # Site config (JSON file, read on every request)
    CONFIG_FILE: str = "config.json"

    # Backend
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    # Static directories
    ASSETS_DIR: str = "assets"
    BRANDING_DIR: str = "branding"
    BRANDING_DEFAULT_DIR: str = "branding-default"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def branding_dir(self) -> str:
        return (
            self.BRANDING_DIR
            if Path(self.BRANDING_DIR).is_dir()
            else self.BRANDING_DEFAULT_DIR
        )


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
