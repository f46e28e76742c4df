"""Notifier configuration, read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict


class ConfigurationError(Exception):
    """Raised when no usable webhook source is configured."""


HOOK_URL_NOT_SET = "Hook URL has not been set."


class NotifierSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: str | None = None
    environment: str | None = None
    region: str | None = None
    webhook_url: str | None = None
    webhook_url_secret_arn: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> NotifierSettings:
        """Build settings from CHANNEL, ENVIRONMENT, REGION, WEBHOOK_URL and
        WEBHOOK_URL_SECRET_ARN. Empty values count as unset."""
        env = os.environ if environ is None else environ
        return cls(
            channel=env.get("CHANNEL") or None,
            environment=env.get("ENVIRONMENT") or None,
            region=env.get("REGION") or None,
            webhook_url=env.get("WEBHOOK_URL") or None,
            webhook_url_secret_arn=env.get("WEBHOOK_URL_SECRET_ARN") or None,
        )

    def require_webhook_source(self) -> None:
        if not self.webhook_url and not self.webhook_url_secret_arn:
            raise ConfigurationError(HOOK_URL_NOT_SET)


def normalize_webhook_url(value: str) -> str:
    """Accept a full https URL or a bare host/path (stored secrets omit the scheme)."""
    value = value.strip()
    if "://" not in value:
        value = f"https://{value}"
    if urlsplit(value).scheme != "https":
        raise ConfigurationError("Webhook URL must use https.")
    return value
