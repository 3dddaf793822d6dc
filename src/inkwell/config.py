"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data")
    content_suffix: str = ".md"
    debug: bool = False
    app_title: str = "Inkwell"
    highlight_style: str = "github-dark"
    home_limit: int = 0

    model_config = SettingsConfigDict(
        env_prefix="INKWELL_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
