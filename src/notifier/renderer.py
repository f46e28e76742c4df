"""Event renderer: CodePipeline state change -> chat message.

Rendering is a pure function of the event and the destination channel.
Severity is a table lookup on the execution state; the message layout is
chosen by the narrowest scope the event carries (action, then stage, then
the pipeline itself).
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import NamedTuple

from src.models import (
    Attachment,
    ChatMessage,
    EventScope,
    PipelineDetail,
    PipelineEvent,
    PipelineState,
)

_CONSOLE_URL = "https://console.aws.amazon.com/codepipeline/home?region={region}#/view/{pipeline}"
_UNKNOWN_STATE = "UNKNOWN"
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Severity(NamedTuple):
    color: str
    icon: str


BLUE = Severity("#0073bb", ":arrows_counterclockwise:")
RED = Severity("#d13212", ":x:")
GRAY = Severity("#d5dbdb", ":grey_exclamation:")
GREEN = Severity("#1d8102", ":heavy_check_mark:")

DEFAULT_SEVERITY = GRAY

SEVERITIES: dict[PipelineState, Severity] = {
    PipelineState.STARTED: BLUE,
    PipelineState.RESUMED: BLUE,
    PipelineState.FAILED: RED,
    PipelineState.SUPERSEDED: GRAY,
    PipelineState.CANCELED: GRAY,
    PipelineState.SUCCEEDED: GREEN,
}


class _Layout(NamedTuple):
    title: str
    text: str
    fallback: str


def severity_for(state: str | None) -> Severity:
    """Look up the color/icon pair for a state, case-insensitively."""
    if not state:
        return DEFAULT_SEVERITY
    try:
        return SEVERITIES[PipelineState(state.upper())]
    except ValueError:
        return DEFAULT_SEVERITY


def classify(detail: PipelineDetail) -> EventScope:
    """Narrowest scope wins; empty strings count as absent."""
    if detail.action:
        return EventScope.ACTION
    if detail.stage:
        return EventScope.STAGE
    return EventScope.PIPELINE


def to_epoch_seconds(time: datetime | None) -> int | float | None:
    """Whole milliseconds since epoch (truncated) divided by 1000.

    Whole seconds come back as an int so the payload reads `1492831907`,
    not `1492831907.0`.
    """
    if time is None:
        return None
    if time.tzinfo is None:
        time = time.replace(tzinfo=UTC)
    millis = (time - _EPOCH) // timedelta(milliseconds=1)
    if millis % 1000 == 0:
        return millis // 1000
    return millis / 1000


def _action_layout(event: PipelineEvent, state: str, icon: str) -> _Layout:
    d = event.detail
    return _Layout(
        title=f"{d.pipeline} | {d.stage}",
        text=f"{icon} {d.action} *{state}*",
        fallback=(
            f'The action "{d.action}" of the stage "{d.stage}" for CodePipeline '
            f'"{d.pipeline}" in region "{event.region}" has {state}.'
        ),
    )


def _stage_layout(event: PipelineEvent, state: str, icon: str) -> _Layout:
    d = event.detail
    return _Layout(
        title=f"{d.pipeline} | {d.stage}",
        text=f"{icon} *{state}*",
        fallback=(
            f'The stage "{d.stage}" for CodePipeline "{d.pipeline}" '
            f'in region "{event.region}" has {state}.'
        ),
    )


def _pipeline_layout(event: PipelineEvent, state: str, icon: str) -> _Layout:
    d = event.detail
    return _Layout(
        title=d.pipeline,
        text=f"{icon} *{state}*",
        fallback=f'The CodePipeline "{d.pipeline}" in region "{event.region}" has {state}.',
    )


_LAYOUTS: dict[EventScope, Callable[[PipelineEvent, str, str], _Layout]] = {
    EventScope.ACTION: _action_layout,
    EventScope.STAGE: _stage_layout,
    EventScope.PIPELINE: _pipeline_layout,
}


def render(event: PipelineEvent, channel: str | None = None) -> ChatMessage:
    """Render a pipeline event as a single-attachment chat message."""
    severity = severity_for(event.detail.state)
    state = event.detail.state or _UNKNOWN_STATE
    layout = _LAYOUTS[classify(event.detail)](event, state, severity.icon)

    attachment = Attachment(
        fallback=layout.fallback,
        color=severity.color,
        title=layout.title,
        title_link=_CONSOLE_URL.format(region=event.region, pipeline=event.detail.pipeline),
        text=layout.text,
        footer=f"{event.detail_type} | {event.region}",
        ts=to_epoch_seconds(event.time),
    )
    return ChatMessage(channel=channel, attachments=(attachment,))
