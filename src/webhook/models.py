"""Data models for webhook delivery."""

from __future__ import annotations

from dataclasses import dataclass

from src.models import DeliveryOutcome


@dataclass
class DeliveryResponse:
    """Drained webhook response, classified for the retry decision."""

    status_code: int
    reason: str
    body: str = ""

    @property
    def outcome(self) -> DeliveryOutcome:
        return DeliveryOutcome.from_status(self.status_code)

    @property
    def retryable(self) -> bool:
        return self.outcome is DeliveryOutcome.SERVER_ERROR
