# threaded_runner.py - run training off the interactive path and collect results.

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional


def run_parallel(tasks: Iterable[Callable], max_workers: int = 4) -> List:
    """
    Run callables (no-arg functions) in a small thread pool.
    Results come back in task order; the first exception raised is re-raised.
    """
    tasks = list(tasks)
    if not tasks:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(tasks)))) as ex:
        futs = [ex.submit(t) for t in tasks]
        return [f.result() for f in futs]


class BackgroundRunner:
    """
    Single-worker executor for background retraining.

    One worker keeps training passes in submission order; callers hold on to
    the returned Future if they want to wait or inspect the outcome.
    """

    def __init__(self, name: str = "predictive-text-train") -> None:
        self._name = name
        self._ex: Optional[ThreadPoolExecutor] = None

    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        if self._ex is None:
            self._ex = ThreadPoolExecutor(max_workers=1, thread_name_prefix=self._name)
        return self._ex.submit(fn, *args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        if self._ex is not None:
            self._ex.shutdown(wait=wait)
            self._ex = None

    def __enter__(self) -> "BackgroundRunner":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
