"""In-process telemetry.

A ``Telemetry`` instance is built once per application (see
``newsdesk.main.create_app``) and handed to repositories through the request
dependencies. Nothing here is module-global, so tests can construct their own
instance and inspect it.
"""

from __future__ import annotations

import logging
from collections import Counter
from contextlib import contextmanager
from threading import Lock
from time import perf_counter
from typing import Any, Iterator

_LOG = logging.getLogger("newsdesk.telemetry")

OUTCOME_SUCCESS = "success"
OUTCOME_ERROR = "error"


class Telemetry:
    def __init__(self, enabled: bool = True, *, service_name: str = "newsdesk-api"):
        self.enabled = bool(enabled)
        self.service_name = service_name
        self._calls: Counter[tuple[str, str, str]] = Counter()
        self._duration_ms: dict[tuple[str, str], float] = {}
        self._lock = Lock()

    def record(self, component: str, operation: str, outcome: str, duration_ms: float = 0.0) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._calls[(component, operation, outcome)] += 1
            key = (component, operation)
            self._duration_ms[key] = self._duration_ms.get(key, 0.0) + max(float(duration_ms), 0.0)

    @contextmanager
    def track(self, component: str, operation: str) -> Iterator[None]:
        started_at = perf_counter()
        outcome = OUTCOME_SUCCESS
        try:
            yield
        except Exception as exc:
            outcome = OUTCOME_ERROR
            _LOG.debug("%s.%s failed: %s", component, operation, exc)
            raise
        finally:
            self.record(component, operation, outcome, (perf_counter() - started_at) * 1000.0)

    def count(self, component: str, operation: str, outcome: str | None = None) -> int:
        with self._lock:
            if outcome is not None:
                return self._calls.get((component, operation, outcome), 0)
            return sum(v for (c, o, _), v in self._calls.items() if c == component and o == operation)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            calls = [
                {"component": c, "operation": o, "outcome": out, "count": n}
                for (c, o, out), n in sorted(self._calls.items())
            ]
            durations = [
                {"component": c, "operation": o, "total_ms": round(ms, 3)}
                for (c, o), ms in sorted(self._duration_ms.items())
            ]
        return {
            "service": self.service_name,
            "enabled": self.enabled,
            "calls": calls,
            "durations": durations,
        }
