"""
Shared utility functions for sleep regularity computation.

Input coercion and epoch arithmetic used by the SRI engine and its
DataFrame entry points.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from sleep_regularity.core.constants import SECONDS_PER_DAY

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    import pandas as pd

logger = logging.getLogger(__name__)


def epochs_per_day(epoch_seconds: float) -> int:
    """
    Convert an epoch length in seconds to the number of epochs per 24 hours.

    Args:
        epoch_seconds: Epoch length in seconds (must divide 86400 evenly)

    Returns:
        Number of epochs per day

    Raises:
        ValueError: If the epoch length is not positive or does not divide a day

    Example:
        >>> epochs_per_day(60)
        1440
        >>> epochs_per_day(30)
        2880

    """
    if isinstance(epoch_seconds, bool | np.bool_) or not isinstance(epoch_seconds, int | float | np.integer | np.floating):
        msg = f"epoch_seconds must be a number, got {epoch_seconds!r}"
        raise ValueError(msg)

    if not 0 < epoch_seconds < np.inf:
        msg = f"epoch_seconds must be positive and finite, got {epoch_seconds!r}"
        raise ValueError(msg)

    count = SECONDS_PER_DAY / epoch_seconds
    if count != int(count):
        msg = f"Epoch length of {epoch_seconds} seconds does not divide 24 hours evenly"
        raise ValueError(msg)

    return int(count)


def validate_epochs_per_day(n: object) -> int:
    """
    Check that ``n`` is a positive integer number of epochs.

    Integral floats (e.g. ``1440.0``) and numpy integers are accepted.

    Raises:
        ValueError: If ``n`` is not a positive integer

    """
    if isinstance(n, bool | np.bool_):
        msg = f"epochs_per_day must be a positive integer, got {n!r}"
        raise ValueError(msg)

    if isinstance(n, int | np.integer):
        value = int(n)
    elif isinstance(n, float | np.floating) and float(n).is_integer():
        value = int(n)
    else:
        msg = f"epochs_per_day must be a positive integer, got {n!r}"
        raise ValueError(msg)

    if value <= 0:
        msg = f"epochs_per_day must be a positive integer, got {value}"
        raise ValueError(msg)

    return value


def to_epoch_array(
    series: Sequence[float] | np.ndarray | pd.Series,
    missing_values: Iterable[float] = (),
) -> np.ndarray:
    """
    Coerce an epoch series to a 1-D float64 array with missing epochs as NaN.

    Args:
        series: Epoch-by-epoch state codes
        missing_values: Additional codes to convert to NaN

    Returns:
        New float64 array (the input is never modified)

    Raises:
        ValueError: If the series is None, non-numeric or not one-dimensional

    """
    if series is None:
        msg = "series cannot be None"
        raise ValueError(msg)

    try:
        values = np.array(series, dtype=np.float64)
    except (ValueError, TypeError) as e:
        msg = f"series contains non-numeric values: {e}"
        raise ValueError(msg) from e

    if values.ndim != 1:
        msg = f"series must be one-dimensional, got {values.ndim} dimensions"
        raise ValueError(msg)

    for code in missing_values:
        values[values == code] = np.nan

    return values
