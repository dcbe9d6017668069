"""Data models for container log operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mypy_boto3_logs.type_defs import OutputLogEventTypeDef


@dataclass
class LogEvent:
    """Represents a log event from CloudWatch."""

    timestamp: int | None
    message: str
    event_id: str | None = None

    @classmethod
    def from_output_event(cls, event: OutputLogEventTypeDef | dict[str, Any]) -> LogEvent:
        return cls(timestamp=event.get("timestamp"), message=event.get("message", "").rstrip("\n"))

    def format(self) -> str:
        """Format the log event for display."""
        if self.timestamp:
            dt = datetime.fromtimestamp(self.timestamp / 1000)
            return f"[{dt.strftime('%Y-%m-%d %H:%M:%S')}] {self.message}"
        return self.message


@dataclass
class RecentLogLines:
    """Tail of one container log stream.

    An empty result cannot be told apart from delivery lag on the CloudWatch read path,
    so ``possibly_delayed`` is set whenever no events came back.
    """

    log_group: str
    log_stream: str
    container_name: str
    events: list[LogEvent] = field(default_factory=list)

    @property
    def possibly_delayed(self) -> bool:
        return not self.events
