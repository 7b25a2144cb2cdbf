"""promptshare configuration management."""

import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger("promptshare.config")

DEFAULT_API_URL = "https://data.tanshilong.com/api/share"


class ShareSettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # Share service (short code exchange)
    api_url: str = Field(default=DEFAULT_API_URL, description="Short code service base URL")
    request_timeout: float = Field(default=15.0, description="Per-request timeout in seconds")

    # Share links
    public_share_url: Optional[str] = Field(
        default=None,
        description="Public origin used in share links (defaults to the current page)",
    )

    # Presentation
    language: str = Field(default="cn", description="Language for user-facing messages (cn/en)")
    default_author: str = Field(default="official", description="Author for imported templates without one")

    model_config = {"env_prefix": "PROMPTSHARE_", "env_file": ".env", "extra": "ignore"}


def load_settings(**overrides) -> ShareSettings:
    """Load settings from environment, with keyword overrides on top."""
    overrides = {k: v for k, v in overrides.items() if v is not None}
    settings = ShareSettings(**overrides)

    if not settings.api_url.startswith("https://"):
        logger.warning(
            f"Share service URL is not HTTPS ({settings.api_url}). "
            "Shared templates will travel unencrypted."
        )

    return settings
