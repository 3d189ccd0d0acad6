"""Application configuration and constants."""

from typing import Dict, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Older clients send the misspelt name from the first published schema.
PAPER_FORMAT_ALIASES: Dict[str, str] = {"Tabload": "Tabloid"}

FILE_NAME_PATTERN = "^[a-zA-Z0-9!\"#$£%&'()*+,.:;<=>?@\\[\\] ^_`{|}~-]+\\.pdf\\Z"

DEFAULT_MEDIA = "print"
DEFAULT_FORMAT = "A4"
DEFAULT_BACKGROUND = True
DEFAULT_LAYOUT = "portrait"
DEFAULT_SCALE = 1.0

# Chromium rejects page.pdf() scale factors outside this range.
MIN_PDF_SCALE = 0.1
MAX_PDF_SCALE = 2.0

PDF_CONTENT_TYPE = "application/pdf"
RENDER_FAILED_MESSAGE = "render failed"


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = ""
    key_prefix: str = ""
    public_base_url: Optional[str] = None

    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_timeout_seconds: int = 10
    s3_endpoint_url: Optional[str] = None

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_allowed_hosts: str = "*"

    browser_headless: bool = True
    browser_launch_timeout_seconds: float = 10.0
    navigation_timeout_seconds: float = 10.0
    # Below the 15s function timeout so the deadline response can still be sent.
    request_timeout_seconds: float = 13.0

    log_level: str = "INFO"
    log_format: str = "json"

    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 60
    rate_limit_per_hour: int = 1000

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allowed_hosts.strip() == "*":
            return ["*"]
        return [
            origin.strip()
            for origin in self.cors_allowed_hosts.split(",")
            if origin.strip()
        ]


settings = Settings()
