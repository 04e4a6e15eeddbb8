from __future__ import annotations
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Iterator, List, Optional, TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ComputeContext:
    """Resources for the data-parallel parts of the detection, i.e. a thread pool.

    A context is created explicitly and handed to whatever needs it, there is no process-wide instance. It should be
    closed after use, either by calling :meth:`close` or by using it as context manager:

    .. code-block:: python

        with ComputeContext(workers=4) as ctx:
            coordinates = scan_mask(mask, ctx)
    """

    __module__ = "pyquads.utils.context"

    def __init__(self, workers: Optional[int] = None, band_height: int = 256):
        """Create new context.

        Args:
            workers: Number of worker threads, defaults to number of CPUs.
            band_height: Number of image rows processed by a single task.
        """
        if workers is not None and workers < 1:
            raise ValueError("Number of workers must be positive.")
        if band_height < 1:
            raise ValueError("Band height must be positive.")

        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        self.band_height = band_height
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Thread pool, created on first use."""
        if self._executor is None:
            log.debug("Starting thread pool with %d workers.", self.workers)
            self._executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="pyquads")
        return self._executor

    def bands(self, height: int) -> Iterator[slice]:
        """Split the given number of rows into bands.

        Args:
            height: Number of rows.

        Yields:
            Row slices covering all rows.
        """
        for start in range(0, height, self.band_height):
            yield slice(start, min(start + self.band_height, height))

    def map(self, func: Callable[[T], R], items: Iterable[T]) -> List[R]:
        """Run func on all items in parallel and wait for all of them to finish.

        Args:
            func: Function to call.
            items: Items to call function with.

        Returns:
            Results in order of items.

        Raises:
            Exception: First exception raised by any call.
        """
        futures = [self.executor.submit(func, item) for item in items]
        return [f.result() for f in futures]

    def close(self) -> None:
        """Shut down thread pool."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> ComputeContext:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


__all__ = ["ComputeContext"]
