"""
Constants for Sleep Regularity Analysis.

All string enums and numeric constants are defined in the ``algorithms``
submodule and re-exported here:

    from sleep_regularity.core.constants import RegularityStatus
"""

from .algorithms import (
    DEFAULT_EPOCHS_PER_DAY,
    MIN_RELIABLE_DAYS,
    SECONDS_PER_DAY,
    SRI_MAX,
    SRI_MIN,
    AlgorithmType,
    InsufficientDataPolicy,
    RegularityColumn,
    RegularityStatus,
)

__all__ = [
    "DEFAULT_EPOCHS_PER_DAY",
    "MIN_RELIABLE_DAYS",
    "SECONDS_PER_DAY",
    "SRI_MAX",
    "SRI_MIN",
    "AlgorithmType",
    "InsufficientDataPolicy",
    "RegularityColumn",
    "RegularityStatus",
]
