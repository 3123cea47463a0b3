"""Application configuration using Pydantic Settings.

Environment variables are automatically mapped to Settings fields.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

IMAGE_ALIGNMENTS = ("left", "center", "right")


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Invalid values cause validation errors at startup,
    so misconfiguration fails early with clear error messages.
    """

    # --- Diagnostics ---
    mowenpub_debug: bool = False

    # --- Mowen OpenAPI ---
    mowen_api_key: str = ""
    mowen_api_url: str = "https://open.mowen.cn/api/open/api/v1"
    mowen_timeout: float = 30.0

    # --- Note Publishing ---
    mowen_auto_publish: bool = True

    # --- Image Atoms ---
    mowen_image_align: str = "center"
    # Shown in place of an empty alt text when an image falls back to a link
    mowen_image_fallback_alt: str = "图片"

    @model_validator(mode="after")
    def validate_image_align(self) -> "Settings":
        """Validate the image alignment value.

        Raises:
            ValueError: If the alignment is not supported by Mowen image atoms

        """
        if self.mowen_image_align not in IMAGE_ALIGNMENTS:
            msg = (
                f"MOWEN_IMAGE_ALIGN must be one of {', '.join(IMAGE_ALIGNMENTS)}, "
                f"got {self.mowen_image_align!r}"
            )
            raise ValueError(msg)
        return self

    @property
    def is_publishing_configured(self) -> bool:
        """Whether an API key is available for talking to Mowen."""
        return bool(self.mowen_api_key)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance.

    Uses lru_cache to ensure the .env file is only parsed once
    and all modules share the same settings instance.

    Returns:
        Settings instance with application configuration.

    Raises:
        ValidationError: If an environment variable holds an invalid value.

    """
    return Settings()


settings = get_settings()
