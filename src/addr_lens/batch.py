"""Sequential batch execution over address columns."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol, TypeVar

import pandas as pd

from addr_lens.exceptions import BatchCancelledError

logger = logging.getLogger(__name__)

# Rows between cancellation checks.
CHECK_INTERVAL = 10_000

T = TypeVar("T")
RowOperation = Callable[[str, int], T]


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


def is_missing(value: Any) -> bool:
    """True for None and pandas/numpy missing scalars (NaN, pd.NA, NaT)."""
    if value is None:
        return True
    if isinstance(value, str):
        return False
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


def run_batch(
    addresses: Iterable[Any],
    operation: RowOperation[T],
    *,
    cancel_event: CancelToken | None = None,
) -> list[T | None]:
    """Apply a row operation to every non-null address, in input order.

    Args:
        addresses: Address texts; None/NaN rows are skipped.
        operation: Called as operation(text, row_index) for non-null rows.
        cancel_event: Polled every CHECK_INTERVAL rows, e.g. threading.Event.

    Returns:
        One result per input row; None where the input row was null.

    Raises:
        BatchCancelledError: If cancel_event is set at a checkpoint. No partial
            result is returned.
    """
    rows = list(addresses)
    total = len(rows)
    results: list[T | None] = [None] * total

    for i, address in enumerate(rows):
        if i % CHECK_INTERVAL == 0:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("batch cancelled at row %d of %d", i, total)
                raise BatchCancelledError(i)
            if i:
                logger.debug("batch progress: %d/%d rows", i, total)

        if is_missing(address):
            continue
        results[i] = operation(str(address), i)

    return results
