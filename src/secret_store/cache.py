"""Process-lifetime cache for the webhook URL."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class WebhookUrlCache:
    """Holds the webhook URL: unresolved until the first successful resolve.

    Once resolved the value is never refreshed or cleared. A failed resolve
    leaves the cache unresolved so the next invocation tries again.
    """

    def __init__(self) -> None:
        self._url: str | None = None

    @property
    def resolved(self) -> bool:
        return self._url is not None

    async def get(self, resolve: Callable[[], Awaitable[str]]) -> str:
        if self._url is None:
            logger.info("Resolving webhook URL (cold start)")
            self._url = await resolve()
        return self._url
