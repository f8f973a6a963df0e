"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `PDFWEAVER_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """pdfweaver settings.

    All fields are environment-configurable. Prefix is `PDFWEAVER_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="PDFWEAVER_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")
    library_log_level: str = Field(default="ERROR")

    # Output
    pdf_version: str = Field(default="1.5", pattern=r"^\d\.\d$")
    default_output: Path = Field(default=Path("output.pdf"))
    compressed_suffix: str = Field(default="_compressed", min_length=1)

    # Bookmarks
    bookmark_label_template: str = Field(default="Page_{n}")
    bookmark_color: tuple[float, float, float] = Field(default=(0.0, 0.0, 1.0))

    # Compression
    compress_streams: bool = Field(default=True)
    compression_level: int = Field(default=6, ge=0, le=9)
    prune_unreachable: bool = Field(default=True)

    # Parsing
    strict_parsing: bool = Field(default=False)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("PDFWEAVER_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
