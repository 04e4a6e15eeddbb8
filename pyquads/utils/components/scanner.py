import logging
from typing import Any, Optional

import numpy as np
import numpy.typing as npt

from pyquads.utils.context import ComputeContext
from pyquads.utils.exceptions import MissingInputError, InvalidInputError, ExecutionError, ResourceError
from pyquads.utils.threads import AtomicCounter

log = logging.getLogger(__name__)


"""Cells with values at or above this level are foreground."""
FOREGROUND_LEVEL = 0.5


def _foreground(band: npt.NDArray[Any]) -> npt.NDArray[np.bool_]:
    return band if band.dtype == np.bool_ else band >= FOREGROUND_LEVEL


def scan_mask(mask: Optional[npt.NDArray[Any]], context: Optional[ComputeContext] = None) -> npt.NDArray[np.int64]:
    """Collect the coordinates of all foreground cells in a binary mask.

    The mask is processed in two parallel passes over bands of rows. The first pass counts the foreground cells of
    all bands into a shared counter. After all bands have been counted, an output array of exactly that size is
    allocated, and in the second pass each band claims the next free rows of the output and writes its coordinates
    into them. The order of the coordinates therefore depends on thread scheduling and must not be relied upon.

    Args:
        mask: 2D array of shape (height, width), either boolean or with values in 0..1.
        context: Context to run in. If None, a temporary one is used.

    Returns:
        Array of shape (N, 2) with one (x, y) coordinate per row.

    Raises:
        MissingInputError: If no mask is given.
        InvalidInputError: If mask is not 2D.
        ResourceError: If output array could not be allocated.
    """

    if mask is None:
        raise MissingInputError("mask")
    data = np.asarray(mask)
    if data.ndim != 2:
        raise InvalidInputError("mask", f"Mask must be 2D, got shape {data.shape}.")

    # temporary context?
    if context is None:
        with ComputeContext() as ctx:
            return scan_mask(data, ctx)

    bands = list(context.bands(data.shape[0]))

    # pass 1: count
    counter = AtomicCounter()

    def _count(band: slice) -> None:
        counter.fetch_add(int(np.count_nonzero(_foreground(data[band]))))

    context.map(_count, bands)
    total = counter.value
    log.debug("Found %d foreground pixels in mask of size %dx%d.", total, data.shape[1], data.shape[0])
    if total == 0:
        return np.empty((0, 2), dtype=np.int64)

    # allocate output
    try:
        coordinates = np.empty((total, 2), dtype=np.int64)
    except MemoryError as e:
        raise ResourceError(f"Could not allocate buffer for {total} coordinates.") from e

    # pass 2: collect
    slots = AtomicCounter()

    def _collect(band: slice) -> None:
        rows, cols = np.nonzero(_foreground(data[band]))
        start = slots.fetch_add(len(rows))
        if start + len(rows) > total:
            raise ExecutionError("Mask changed while being scanned.")
        coordinates[start : start + len(rows), 0] = cols
        coordinates[start : start + len(rows), 1] = rows + band.start

    context.map(_collect, bands)
    if slots.value != total:
        raise ExecutionError("Mask changed while being scanned.")
    return coordinates


__all__ = ["scan_mask", "FOREGROUND_LEVEL"]
