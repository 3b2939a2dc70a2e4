"""Timing of order service operations."""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generator
from uuid import uuid4

from hotel_orders.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class TraceStep:
    """A single timed step within a use case."""

    name: str
    duration_ms: float
    failed: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)


class OperationTracer:
    """Times the steps of one service operation (create, update).

    Steps are logged at debug level as they finish; the totals are meant to
    be attached to the operation's final log line.
    """

    def __init__(self, operation: str, trace_id: str | None = None):
        self.operation = operation
        self.trace_id = trace_id or uuid4().hex
        self.steps: list[TraceStep] = []
        self._started = time.perf_counter()

    @contextmanager
    def trace_step(self, name: str, **metadata: Any) -> Generator[None, None, None]:
        """Time the enclosed block as step ``name``."""
        start = time.perf_counter()
        failed = False
        try:
            yield
        except Exception:
            failed = True
            raise
        finally:
            step = TraceStep(
                name=name,
                duration_ms=(time.perf_counter() - start) * 1000,
                failed=failed,
                metadata=metadata,
            )
            self.steps.append(step)
            logger.debug(
                "trace_step",
                trace_id=self.trace_id,
                operation=self.operation,
                step=step.name,
                duration_ms=round(step.duration_ms, 3),
                failed=step.failed,
                **metadata,
            )

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._started) * 1000

    def step_durations(self) -> dict[str, float]:
        """Milliseconds spent per step name; repeated steps (retries) add up."""
        durations: dict[str, float] = {}
        for step in self.steps:
            durations[step.name] = round(durations.get(step.name, 0.0) + step.duration_ms, 3)
        return durations
