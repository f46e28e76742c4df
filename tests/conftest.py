"""Shared test fixtures for the CodePipeline chat notifier."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from src.models import PipelineEvent
from src.notifier.config import NotifierSettings
from src.secret_store.cache import WebhookUrlCache

WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"
SECRET_ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:slack-webhook"


@pytest.fixture
def url_cache() -> WebhookUrlCache:
    return WebhookUrlCache()


@pytest.fixture
def secrets_client() -> MagicMock:
    """boto3 Secrets Manager client stand-in returning a bare host/path secret."""
    client = MagicMock()
    client.get_secret_value.return_value = {
        "SecretString": "hooks.slack.com/services/T000/B000/XXXX",
    }
    return client


# --- Factory functions for test data ---


def make_raw_event(**detail: Any) -> dict[str, Any]:
    """Factory for an EventBridge CodePipeline event with sensible defaults."""
    defaults: dict[str, Any] = {
        "pipeline": "my-pipeline",
        "state": "STARTED",
        "execution-id": "01234567-0123-0123-0123-012345678901",
        "version": 1.0,
    }
    defaults.update(detail)
    return {
        "version": "0",
        "id": "CWE-event-id",
        "detail-type": "CodePipeline Pipeline Execution State Change",
        "source": "aws.codepipeline",
        "account": "123456789012",
        "time": "2017-04-22T03:31:47Z",
        "region": "us-east-1",
        "resources": ["arn:aws:codepipeline:us-east-1:123456789012:pipeline:my-pipeline"],
        "detail": {k: v for k, v in defaults.items() if v is not None},
    }


def make_event(**detail: Any) -> PipelineEvent:
    return PipelineEvent.model_validate(make_raw_event(**detail))


def make_settings(**kwargs: Any) -> NotifierSettings:
    """Factory for NotifierSettings with sensible defaults."""
    defaults: dict[str, Any] = {
        "channel": "#deployments",
        "environment": "test",
        "region": "us-east-1",
        "webhook_url": None,
        "webhook_url_secret_arn": SECRET_ARN,
    }
    defaults.update(kwargs)
    return NotifierSettings(**defaults)
