"""
test_workers.py
"""
import queue
import threading

import pytest

from multibrot import BOUNDED, Diverged, PixelResult, WorkerPool, make_view, partition_rows, run_worker, sample_points


@pytest.mark.parametrize('rows, workers, expected', [
    (8, 1, [(0, 8)]),
    (8, 4, [(0, 2), (2, 4), (4, 6), (6, 8)]),
    (10, 4, [(0, 2), (2, 4), (4, 6), (6, 10)]),
    (3, 8, [(0, 0)] * 7 + [(0, 3)]),
])
def test_partition_rows(rows, workers, expected):
    assert partition_rows(rows, workers) == expected


def test_partition_rows_covers_every_row_once():
    for rows in range(1, 40):
        for workers in (1, 2, 3, 8, 16):
            covered = [y for start, stop in partition_rows(rows, workers) for y in range(start, stop)]
            assert covered == list(range(rows))


def test_partition_rows_rejects_empty_pool():
    with pytest.raises(ValueError):
        partition_rows(10, 0)


def test_run_worker_emits_every_pixel_then_closes():
    view = make_view((4, 4), 2.0, complex(-1, 0))
    results = queue.Queue()
    vals, pixels = sample_points(view, 0, 2)
    run_worker(vals, pixels, 10, 2.0, results)

    items = [results.get_nowait() for _ in range(results.qsize())]
    assert items[-1] is None
    emitted = items[:-1]
    assert [(pix.x, pix.y) for pix in emitted] == [(x, y) for y in range(2) for x in range(4)]
    assert emitted[0] == PixelResult(0, 0, Diverged(1))
    assert emitted[7] == PixelResult(3, 1, BOUNDED)


def test_unknown_executor_is_rejected():
    with pytest.raises(ValueError):
        WorkerPool(make_view((2, 2), 1.0, 0j), 5, 2.0, 1, executor='fiber')


def test_pool_cannot_start_twice():
    pool = WorkerPool(make_view((2, 2), 1.0, 0j), 5, 2.0, 2)
    queues = pool.start()
    for results in queues:
        while results.get(timeout=5) is not None:
            pass
    pool.join()
    with pytest.raises(RuntimeError):
        pool.start()


def test_stop_unblocks_workers_on_full_queues():
    """
    Workers parked on full queues exit once the pool is stopped.
    """
    before = threading.active_count()
    pool = WorkerPool(make_view((64, 64), 2.0, complex(-1, 0)), 50, 2.0, 4)
    queues = pool.start()
    queues[0].get(timeout=5)
    pool.stop()
    assert threading.active_count() == before
    assert pool.cancelled.is_set()


def test_cancelled_worker_still_closes_its_queue():
    view = make_view((4, 4), 2.0, complex(-1, 0))
    results = queue.Queue()
    cancelled = threading.Event()
    cancelled.set()
    vals, pixels = sample_points(view, 0, 4)
    run_worker(vals, pixels, 10, 2.0, results, cancelled)
    assert results.get_nowait() is None
    assert results.empty()
