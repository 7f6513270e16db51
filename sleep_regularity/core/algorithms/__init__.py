"""
Sleep regularity algorithms package - Framework-agnostic implementations.

This package provides a pure Python implementation of the Sleep Regularity
Index that can be used from any interface (batch processing, notebooks,
services) on already-scored sleep/wake epoch data.

Algorithms Included:
    - Sleep Regularity Index (Phillips et al. 2017)

Example Usage (Function-based API):
    ```python
    import numpy as np
    from sleep_regularity.core.algorithms import calculate_sri, epochs_per_day

    # 1 = wake, 0 = sleep, NaN = missing
    sri, days = calculate_sri(states, epochs_per_day(60))
    ```

Example Usage (Object-based API):
    ```python
    from sleep_regularity.core.algorithms import SleepRegularityIndex, THIRTY_SECOND_EPOCHS_CONFIG

    algorithm = SleepRegularityIndex(THIRTY_SECOND_EPOCHS_CONFIG)
    result = algorithm.compute_dataframe(scored_df)
    if result.is_reliable:
        print(result.sri)
    ```
"""

from __future__ import annotations

from .config import (
    FIFTEEN_MINUTE_EPOCHS_CONFIG,
    ONE_MINUTE_EPOCHS_CONFIG,
    THIRTY_SECOND_EPOCHS_CONFIG,
    SleepRegularityConfig,
)
from .sri import (
    SleepRegularityIndex,
    SleepRegularityResult,
    align_day_shift,
    calculate_sri,
    compute_sleep_regularity,
    count_concordance,
    normalize_index,
    sri_by_participant,
    sri_score,
    validate_encoding,
)
from .utils import epochs_per_day, to_epoch_array, validate_epochs_per_day

__all__ = [
    # Presets
    "FIFTEEN_MINUTE_EPOCHS_CONFIG",
    "ONE_MINUTE_EPOCHS_CONFIG",
    "THIRTY_SECOND_EPOCHS_CONFIG",
    # Config
    "SleepRegularityConfig",
    # Algorithm class and result
    "SleepRegularityIndex",
    "SleepRegularityResult",
    # SRI functions
    "align_day_shift",
    "calculate_sri",
    "compute_sleep_regularity",
    "count_concordance",
    # Utilities
    "epochs_per_day",
    "normalize_index",
    "sri_by_participant",
    "sri_score",
    "to_epoch_array",
    "validate_encoding",
    "validate_epochs_per_day",
]
