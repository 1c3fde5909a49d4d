"""In-process tool and request counters for a single server process."""

from __future__ import annotations

from collections import Counter, OrderedDict
from threading import Lock
from typing import Dict, Optional

MAX_TRACKED_REQUESTS = 100


class MetricsRecorder:
    def __init__(self, max_tracked_requests: int = MAX_TRACKED_REQUESTS) -> None:
        self._lock = Lock()
        self._max_tracked = max_tracked_requests
        self._requests = 0
        self._request_durations_ms: "OrderedDict[str, float]" = OrderedDict()
        self._tool_success: Counter[str] = Counter()
        self._tool_error: Counter[str] = Counter()
        self._tool_duration_ms: Dict[str, float] = {}

    def incr_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_duration(self, request_id: str, duration_ms: float) -> None:
        """Remember the latency of an HTTP request; only the newest entries are kept."""
        with self._lock:
            self._request_durations_ms[request_id] = duration_ms
            while len(self._request_durations_ms) > self._max_tracked:
                self._request_durations_ms.popitem(last=False)

    def record_tool(self, tool: str, *, success: bool, duration_ms: Optional[float] = None) -> None:
        with self._lock:
            if success:
                self._tool_success[tool] += 1
            else:
                self._tool_error[tool] += 1
            if duration_ms is not None:
                self._tool_duration_ms[tool] = duration_ms

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "requests": self._requests,
                "tool_success": dict(self._tool_success),
                "tool_error": dict(self._tool_error),
                "last_tool_duration_ms": dict(self._tool_duration_ms),
                "recent_request_durations_ms": dict(self._request_durations_ms),
            }

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._request_durations_ms.clear()
            self._tool_success.clear()
            self._tool_error.clear()
            self._tool_duration_ms.clear()


default_metrics = MetricsRecorder()
