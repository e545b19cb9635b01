"""Prometheus-compatible request and login metrics for FastAPI."""

from __future__ import annotations

import threading
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Tuple

RequestKey = Tuple[str, str, str]
RouteKey = Tuple[str, str]

AUTH_OUTCOMES = ("success", "unauthorized", "error")


@dataclass
class LatencyStats:
    """Aggregate latency metrics for a route."""

    count: int = 0
    total_duration: float = 0.0

    def observe(self, duration: float) -> None:
        self.count += 1
        self.total_duration += duration


_request_counts: Dict[RequestKey, int] = defaultdict(int)
_error_counts: Dict[RequestKey, int] = defaultdict(int)
_latency_stats: Dict[RouteKey, LatencyStats] = defaultdict(LatencyStats)
_auth_outcomes: Dict[str, int] = {outcome: 0 for outcome in AUTH_OUTCOMES}
_metrics_lock = threading.Lock()


class MetricsMiddleware:
    """ASGI middleware that records request metrics."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope.get("type") != "http" or scope.get("path") == "/metrics":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        start_time = time.perf_counter()
        status_holder: Dict[str, int] = {}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            _record_request(method, path, 500, time.perf_counter() - start_time)
            raise
        _record_request(
            method, path, status_holder.get("status", 500), time.perf_counter() - start_time
        )


def _record_request(method: str, path: str, status: int, duration: float) -> None:
    key: RequestKey = (method, path, str(status))
    with _metrics_lock:
        _request_counts[key] += 1
        _latency_stats[(method, path)].observe(duration)
        if status >= 500:
            _error_counts[key] += 1


def record_authentication_outcome(outcome: str) -> None:
    """Count one login attempt under ``success``, ``unauthorized`` or ``error``."""

    if outcome not in _auth_outcomes:
        raise ValueError(f"Unknown authentication outcome {outcome!r}")
    with _metrics_lock:
        _auth_outcomes[outcome] += 1


def render_metrics() -> str:
    """Render collected metrics in the Prometheus exposition format."""

    lines: list[str] = []

    with _metrics_lock:
        lines.append("# HELP authgate_requests_total Total HTTP requests")
        lines.append("# TYPE authgate_requests_total counter")
        for (method, path, status), value in sorted(_request_counts.items()):
            lines.append(
                f'authgate_requests_total{{method="{method}",path="{path}",status="{status}"}} {value}'
            )

        lines.append("# HELP authgate_request_errors_total HTTP requests answered with a 5xx status")
        lines.append("# TYPE authgate_request_errors_total counter")
        for (method, path, status), value in sorted(_error_counts.items()):
            lines.append(
                f'authgate_request_errors_total{{method="{method}",path="{path}",status="{status}"}} {value}'
            )

        lines.append("# HELP authgate_request_duration_seconds_sum Total time spent handling requests")
        lines.append("# TYPE authgate_request_duration_seconds_sum counter")
        for (method, path), stats in sorted(_latency_stats.items()):
            lines.append(
                f'authgate_request_duration_seconds_sum{{method="{method}",path="{path}"}} {stats.total_duration}'
            )

        lines.append("# HELP authgate_request_duration_seconds_count Total number of timed requests")
        lines.append("# TYPE authgate_request_duration_seconds_count counter")
        for (method, path), stats in sorted(_latency_stats.items()):
            lines.append(
                f'authgate_request_duration_seconds_count{{method="{method}",path="{path}"}} {stats.count}'
            )

        lines.append("# HELP authgate_login_attempts_total Login attempts by outcome")
        lines.append("# TYPE authgate_login_attempts_total counter")
        for outcome in AUTH_OUTCOMES:
            lines.append(
                f'authgate_login_attempts_total{{outcome="{outcome}"}} {_auth_outcomes[outcome]}'
            )

    return "\n".join(lines) + "\n"
