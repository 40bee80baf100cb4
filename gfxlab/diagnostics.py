"""Screenshot scheduling and formatting of graphics debug messages."""

from __future__ import annotations

import heapq
from collections.abc import Mapping, Sequence
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any


class DebugSource(IntEnum):
    API = 0x8246
    WINDOW_SYSTEM = 0x8247
    SHADER_COMPILER = 0x8248
    THIRD_PARTY = 0x8249
    APPLICATION = 0x824A
    OTHER = 0x824B


class DebugType(IntEnum):
    ERROR = 0x824C
    DEPRECATED_BEHAVIOR = 0x824D
    UNDEFINED_BEHAVIOR = 0x824E
    PORTABILITY = 0x824F
    PERFORMANCE = 0x8250
    OTHER = 0x8251
    MARKER = 0x8268


class DebugSeverity(IntEnum):
    HIGH = 0x9146
    MEDIUM = 0x9147
    LOW = 0x9148
    NOTIFICATION = 0x826B


_SOURCE_LABELS = {
    DebugSource.API: "API",
    DebugSource.WINDOW_SYSTEM: "WINDOW SYSTEM",
    DebugSource.SHADER_COMPILER: "SHADER COMPILER",
    DebugSource.THIRD_PARTY: "THIRD PARTY",
    DebugSource.APPLICATION: "APPLICATION",
}

_TYPE_LABELS = {
    DebugType.ERROR: "ERROR",
    DebugType.DEPRECATED_BEHAVIOR: "DEPRECATED BEHAVIOR",
    DebugType.UNDEFINED_BEHAVIOR: "UDEFINED BEHAVIOR",
    DebugType.PORTABILITY: "PORTABILITY",
    DebugType.PERFORMANCE: "PERFORMANCE",
    DebugType.OTHER: "OTHER",
    DebugType.MARKER: "MARKER",
}

_SEVERITY_LABELS = {
    DebugSeverity.HIGH: "HIGH",
    DebugSeverity.MEDIUM: "MEDIUM",
    DebugSeverity.LOW: "LOW",
    DebugSeverity.NOTIFICATION: "NOTIFICATION",
}


def format_debug_message(
    message_id: int, source: int, message_type: int, severity: int, message: str
) -> str:
    """Describe a graphics debug message; unrecognised codes read as UNKNOWN."""
    source_label = _SOURCE_LABELS.get(source, "UNKNOWN")
    type_label = _TYPE_LABELS.get(message_type, "UNKNOWN")
    severity_label = _SEVERITY_LABELS.get(severity, "UNKNOWN")
    return (
        f"OpenGL Debug Message {message_id} (type: {type_label}) of {severity_label}"
        f" raised from {source_label}: {message}"
    )


def default_screenshot_filepath(now: datetime | None = None) -> str:
    """Path for a screenshot taken at ``now`` (the current local time by default)."""
    moment = now if now is not None else datetime.now()
    return f"screenshots/screenshot-{moment:%Y-%m-%d-%H-%M-%S}.png"


class ScreenshotQueue:
    """Screenshots requested for given frames, earliest frame first.

    ``config`` is the ``screenshots`` section of the application
    configuration: ``{"directory": ..., "requests": [{"file": ..., "frame": ...}]}``.
    Anything that is not such an object gives an empty queue.
    """

    def __init__(self, config: Any) -> None:
        self._requests: list[tuple[int, str]] = []
        if not isinstance(config, Mapping):
            return
        base_path = Path(config.get("directory", "screenshots"))
        requests = config.get("requests")
        if not isinstance(requests, Sequence) or isinstance(requests, (str, bytes)):
            return
        for item in requests:
            if not isinstance(item, Mapping):
                raise TypeError(f"a screenshot request must be an object, got {item!r}")
            path = base_path / item.get("file", "")
            frame = int(item.get("frame", 0))
            self._requests.append((frame, str(path)))
        heapq.heapify(self._requests)

    def due(self, frame: int) -> list[str]:
        """Remove and return the paths requested for ``frame``.

        Only the requests at the front of the queue are looked at, so a
        request for an earlier frame that was never served holds back the rest.
        """
        paths = []
        while self._requests and self._requests[0][0] == frame:
            paths.append(heapq.heappop(self._requests)[1])
        return paths

    def __len__(self) -> int:
        return len(self._requests)