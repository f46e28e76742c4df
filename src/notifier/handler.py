"""Lambda entry point: CodePipeline event -> chat webhook.

Flow per invocation:
1. Configuration check (a webhook source must be set)
2. Webhook URL from the process cache, resolving it on cold start
3. Render the event
4. Deliver once and apply the retry contract
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from typing import Any

from src.models import DeliveryOutcome, PipelineEvent
from src.notifier.config import NotifierSettings, normalize_webhook_url
from src.notifier.renderer import render
from src.secret_store.cache import WebhookUrlCache
from src.secret_store.resolver import SecretResolver, SecretsManagerResolver
from src.webhook.client import DeliveryError, WebhookClient
from src.webhook.models import DeliveryResponse

logger = logging.getLogger(__name__)


class Notifier:
    """Renders one event and delivers it to the configured webhook."""

    def __init__(
        self,
        settings: NotifierSettings,
        url_cache: WebhookUrlCache,
        resolver: SecretResolver | None = None,
        client_factory: Callable[[str], WebhookClient] = WebhookClient,
    ) -> None:
        self._settings = settings
        self._cache = url_cache
        self._resolver = resolver
        self._client_factory = client_factory

    async def notify(self, raw_event: dict[str, Any]) -> DeliveryResponse:
        """Process one event.

        Returns normally on success and on client rejection (4xx).
        Raises ConfigurationError, secret-store errors unchanged, or
        DeliveryError when the invocation should be retried.
        """
        self._settings.require_webhook_source()
        webhook_url = await self._cache.get(self._resolve_url)

        event = PipelineEvent.model_validate(raw_event)
        message = render(event, channel=self._settings.channel)

        response = await self._client_factory(webhook_url).send(message)

        if response.outcome is DeliveryOutcome.SUCCESS:
            logger.info("Message posted successfully")
        elif response.outcome is DeliveryOutcome.CLIENT_ERROR:
            # Not retried: the same request would be rejected again.
            logger.error(
                "Error posting message to Slack API: %s - %s (%s)",
                response.status_code, response.reason, response.body,
            )
        else:
            logger.warning(
                "Server error posting message: %s - %s",
                response.status_code, response.reason,
            )
            raise DeliveryError.from_response(response)
        return response

    async def _resolve_url(self) -> str:
        if self._settings.webhook_url:
            return normalize_webhook_url(self._settings.webhook_url)

        resolver = self._resolver
        if resolver is None:
            resolver = SecretsManagerResolver.for_region(self._settings.region)
            self._resolver = resolver
        secret = await resolver.resolve(self._settings.webhook_url_secret_arn or "")
        return normalize_webhook_url(secret)


_url_cache = WebhookUrlCache()
_notifier: Notifier | None = None


def configure_logging() -> None:
    """Apply LOG_LEVEL to the package loggers; unknown names fall back to INFO."""
    name = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
        logger.warning("Unknown LOG_LEVEL %r, using INFO", name)
    logging.getLogger("src").setLevel(level)


def _get_notifier() -> Notifier:
    global _notifier
    if _notifier is None:
        configure_logging()
        settings = NotifierSettings.from_env()
        logger.info(
            "Notifier configured (environment=%s, region=%s)",
            settings.environment, settings.region,
        )
        _notifier = Notifier(settings, _url_cache)
    return _notifier


def handler(event: dict[str, Any], context: Any) -> None:
    """AWS Lambda handler. Raising signals Lambda to retry the invocation."""
    asyncio.run(_get_notifier().notify(event))
