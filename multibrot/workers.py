"""Fan-out of escape-time work across row bands."""

from __future__ import annotations

import logging
import multiprocessing
import queue
import threading
from typing import Any, Iterable, NamedTuple, Optional

from .escape import EscapeResult, diverges_within
from .generator import sample_points
from .view import View

logger = logging.getLogger(__name__)

QUEUE_CAPACITY = 128
STOP_POLL_INTERVAL = 0.05

EXECUTORS = ("thread", "process")


class PixelResult(NamedTuple):
    x: int
    y: int
    escape: EscapeResult


def partition_rows(rows: int, workers: int) -> list[tuple[int, int]]:
    """Split ``rows`` into ``workers`` equal bands; the last one takes the remainder."""

    if workers < 1:
        raise ValueError(f"worker count must be at least 1, got {workers}")
    step = rows // workers
    bands = [(step * i, step * (i + 1)) for i in range(workers)]
    bands[-1] = (bands[-1][0], rows)
    return bands


def run_worker(
    samples: Iterable[complex],
    points: Iterable[tuple[int, int]],
    max_iterations: int,
    exponent: float,
    results: Any,
    cancelled: Any = None,
) -> None:
    """Evaluate each sample and put its ``PixelResult`` on ``results``.

    ``None`` is put last to mark the queue as closed. When ``cancelled`` is
    set the worker stops early and still closes its queue.
    """

    for sample, (x, y) in zip(samples, points):
        if cancelled is not None and cancelled.is_set():
            break
        results.put(PixelResult(x, y, diverges_within(sample, max_iterations, exponent)))
    results.put(None)


def _band_worker(
    view: View, start: int, stop: int, max_iterations: int, exponent: float, results: Any, cancelled: Any
) -> None:
    vals, pixels = sample_points(view, start, stop)
    run_worker(vals, pixels, max_iterations, exponent, results, cancelled)


class WorkerPool:
    """One worker and one bounded result queue per row band."""

    def __init__(
        self,
        view: View,
        max_iterations: int,
        exponent: float,
        workers: int,
        executor: str = "thread",
    ) -> None:
        if executor not in EXECUTORS:
            raise ValueError(f"unknown executor {executor!r}, expected one of {', '.join(EXECUTORS)}")
        self.view = view
        self.max_iterations = max_iterations
        self.exponent = exponent
        self.executor = executor
        self.bands = partition_rows(view.resolution[1], workers)
        if executor == "process":
            context = multiprocessing.get_context()
            self.queues = [context.Queue(QUEUE_CAPACITY) for _ in self.bands]
            self.cancelled = context.Event()
            task_type: Any = context.Process
        else:
            self.queues = [queue.Queue(QUEUE_CAPACITY) for _ in self.bands]
            self.cancelled = threading.Event()
            task_type = threading.Thread
        self._tasks = [
            task_type(
                target=_band_worker,
                args=(view, start, stop, max_iterations, exponent, results, self.cancelled),
                name=f"multibrot-worker-{index}",
                daemon=True,
            )
            for index, ((start, stop), results) in enumerate(zip(self.bands, self.queues))
        ]
        self._started = False

    def __len__(self) -> int:
        return len(self._tasks)

    def start(self) -> list[Any]:
        """Launch every worker and return their result queues."""

        if self._started:
            raise RuntimeError("worker pool already started")
        for (start, stop), task in zip(self.bands, self._tasks):
            logger.debug("starting %s on rows [%d, %d)", task.name, start, stop)
            task.start()
        self._started = True
        return self.queues

    def join(self, timeout: Optional[float] = None) -> None:
        for task in self._tasks:
            task.join(timeout)
            logger.debug("%s finished", task.name)

    def stop(self) -> None:
        """Cancel every worker and wait until none is left running.

        Threads are unblocked by draining their queues; processes are terminated.
        """

        self.cancelled.set()
        if not self._started:
            return
        for task, results in zip(self._tasks, self.queues):
            if self.executor == "process":
                task.terminate()
            while task.is_alive():
                try:
                    results.get(timeout=STOP_POLL_INTERVAL)
                except queue.Empty:
                    pass
            task.join()
            logger.debug("%s stopped", task.name)
