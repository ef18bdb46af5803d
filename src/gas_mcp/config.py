"""Startup configuration for the Web App relay.

Two values drive the relay: the Web App URL (which carries its own access
key as a query parameter) and the API key injected into every relayed
call. Both are read once at startup and never change afterwards.

Environment variables:
    MCP_WEB_APPS_URL: Deployed Apps Script Web App URL (required).
    GEMINI_API_KEY: API key forwarded to the Web App as ``geminiAPIKey``.
    GAS_MCP_TIMEOUT: Optional request timeout in seconds.
    GAS_MCP_LOG_LEVEL: Logging level name (default: INFO).
"""

import logging
import os
import sys
from collections.abc import Mapping

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

WEB_APPS_URL_ENV = "MCP_WEB_APPS_URL"
API_KEY_ENV = "GEMINI_API_KEY"
TIMEOUT_ENV = "GAS_MCP_TIMEOUT"
LOG_LEVEL_ENV = "GAS_MCP_LOG_LEVEL"

MISSING_URL_MESSAGE = (
    f'Please set your Web Apps URL to "{WEB_APPS_URL_ENV}" of the environmental variables.'
)


class ConfigurationError(RuntimeError):
    """Raised when required startup configuration is missing or invalid."""


class RelaySettings(BaseModel):
    """Immutable relay configuration.

    Attributes:
        web_apps_url: Web App endpoint, including its access key query parameter.
        api_key: Credential injected into every relayed call.
        timeout: Request timeout in seconds, or None to wait indefinitely.
        log_level: Logging level name.
    """

    web_apps_url: str = Field(..., description="Apps Script Web App URL")
    api_key: str = Field(default="", description="API key forwarded to the Web App")
    timeout: float | None = Field(default=None, gt=0, description="Request timeout in seconds")
    log_level: str = Field(default="INFO", description="Logging level name")

    model_config = {"frozen": True}

    @field_validator("web_apps_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(MISSING_URL_MESSAGE)
        try:
            scheme = httpx.URL(value).scheme
        except httpx.InvalidURL as e:
            raise ValueError(f"{WEB_APPS_URL_ENV} is not a valid URL: {e}") from e
        if scheme not in ("http", "https"):
            raise ValueError(f"{WEB_APPS_URL_ENV} must be an http(s) URL")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def create(
        cls,
        web_apps_url: str | None,
        api_key: str | None = None,
        timeout: float | None = None,
        log_level: str | None = None,
    ) -> "RelaySettings":
        """Build settings, converting validation failures to ConfigurationError.

        Raises:
            ConfigurationError: If the URL is missing or any value is invalid.
        """
        if not web_apps_url:
            raise ConfigurationError(MISSING_URL_MESSAGE)

        if not api_key:
            logger.warning("%s is not set; relaying calls with an empty API key", API_KEY_ENV)

        try:
            return cls(
                web_apps_url=web_apps_url,
                api_key=api_key or "",
                timeout=timeout,
                log_level=log_level or "INFO",
            )
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise ConfigurationError(f"Invalid configuration: {messages}") from e

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RelaySettings":
        """Load settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigurationError: If MCP_WEB_APPS_URL is missing or a value is invalid.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get(TIMEOUT_ENV, "").strip()
        try:
            timeout = float(raw_timeout) if raw_timeout else None
        except ValueError as e:
            raise ConfigurationError(f"{TIMEOUT_ENV} must be a number of seconds") from e

        return cls.create(
            web_apps_url=env.get(WEB_APPS_URL_ENV, ""),
            api_key=env.get(API_KEY_ENV, ""),
            timeout=timeout,
            log_level=env.get(LOG_LEVEL_ENV) or None,
        )

    @property
    def redacted_url(self) -> str:
        """Web App URL with every query parameter value masked."""
        url = httpx.URL(self.web_apps_url)
        for key in url.params.keys():
            url = url.copy_set_param(key, "REDACTED")
        return str(url)


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout carries the MCP stdio transport."""
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
