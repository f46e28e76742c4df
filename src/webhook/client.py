"""Chat webhook delivery client.

One POST per call, no internal retry: a retryable failure is raised to the
caller so the hosting framework can re-drive the whole invocation.
"""

from __future__ import annotations

import logging

import httpx

from src.models import ChatMessage
from src.webhook.models import DeliveryResponse

logger = logging.getLogger(__name__)

# httpx logs the full request URL at INFO (httpcore at DEBUG); for an
# incoming webhook the URL is the credential.
for _name in ("httpx", "httpcore"):
    logging.getLogger(_name).setLevel(logging.WARNING)


class DeliveryError(Exception):
    """Raised when delivery failed in a way that should be retried.

    The message carries the status and status text only, never the payload
    or the webhook URL.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)

    @classmethod
    def from_response(cls, response: DeliveryResponse) -> DeliveryError:
        return cls(
            f"Server error when processing message: {response.status_code} - {response.reason}",
            status_code=response.status_code,
            reason=response.reason,
        )

    @classmethod
    def from_transport(cls, exc: httpx.TransportError) -> DeliveryError:
        return cls(f"Transport error when processing message: {type(exc).__name__}")


class WebhookClient:
    """Posts chat messages to a single webhook URL over TLS."""

    def __init__(
        self,
        webhook_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._webhook_url = webhook_url
        self._transport = transport

    async def send(self, message: ChatMessage) -> DeliveryResponse:
        """POST the message once and return the drained, classified response.

        Raises DeliveryError on transport failure. HTTP error statuses are
        returned, not raised; the caller owns the retry decision.
        """
        body = message.to_json().encode()
        headers = {
            "Content-Type": "application/json",
            "Content-Length": str(len(body)),
        }

        # No client-side timeout: the invocation framework bounds the call.
        try:
            async with httpx.AsyncClient(
                verify=True, timeout=None, transport=self._transport,
            ) as client:
                resp = await client.post(self._webhook_url, content=body, headers=headers)
        except httpx.TransportError as exc:
            logger.warning("Webhook transport failure: %s", type(exc).__name__)
            raise DeliveryError.from_transport(exc) from exc

        response = DeliveryResponse(
            status_code=resp.status_code,
            reason=resp.reason_phrase,
            body=resp.text,
        )
        logger.debug(
            "Webhook responded %s (%s)", response.status_code, response.outcome.value,
        )
        return response
