"""Shared Pydantic data models for the CodePipeline chat notifier."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class PipelineState(str, Enum):
    STARTED = "STARTED"
    RESUMED = "RESUMED"
    FAILED = "FAILED"
    SUPERSEDED = "SUPERSEDED"
    CANCELED = "CANCELED"
    SUCCEEDED = "SUCCEEDED"


class EventScope(str, Enum):
    ACTION = "action"
    STAGE = "stage"
    PIPELINE = "pipeline"


class DeliveryOutcome(str, Enum):
    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"

    @classmethod
    def from_status(cls, status_code: int) -> DeliveryOutcome:
        if status_code < 400:
            return cls.SUCCESS
        if status_code < 500:
            return cls.CLIENT_ERROR
        return cls.SERVER_ERROR


# --- Inbound Event Models ---


class PipelineDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    pipeline: str
    state: str | None = None
    stage: str | None = None
    action: str | None = None


class PipelineEvent(BaseModel):
    """EventBridge CodePipeline state-change envelope.

    Only the fields used for rendering are modelled; everything else in the
    envelope is ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    detail_type: str = Field(alias="detail-type")
    region: str
    time: datetime | None = None
    detail: PipelineDetail


# --- Chat Message Models ---


class Attachment(BaseModel):
    model_config = ConfigDict(frozen=True)

    fallback: str
    color: str
    title: str
    title_link: str
    text: str
    footer: str
    mrkdwn_in: tuple[str, ...] = ("text",)
    ts: int | float | None = None


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    channel: str | None = None
    attachments: tuple[Attachment, ...]

    def to_json(self) -> str:
        return self.model_dump_json(exclude_none=True)
