"""
Configuration dataclasses for sleep regularity computation.

This module provides immutable configuration objects for the Sleep Regularity
Index. Presets cover the common epoch lengths used in actigraphy and
sleep-diary studies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sleep_regularity.core.constants import DEFAULT_EPOCHS_PER_DAY, MIN_RELIABLE_DAYS, InsufficientDataPolicy
from sleep_regularity.core.exceptions import ConfigurationError, ErrorCodes

from .utils import validate_epochs_per_day


@dataclass(frozen=True)
class SleepRegularityConfig:
    """
    Configuration for Sleep Regularity Index computation.

    Attributes:
        epochs_per_day: Number of epochs in 24 hours (default: 1440 = 1-minute epochs)
        insufficient_data_policy: Behaviour when no valid comparison pair exists (default: PROPAGATE)
        missing_values: Extra numeric codes treated as missing, in addition to NaN (default: none)
        min_reliable_days: Valid days below which the SRI is flagged as unreliable (default: 5.0)

    """

    epochs_per_day: int = DEFAULT_EPOCHS_PER_DAY
    insufficient_data_policy: InsufficientDataPolicy = InsufficientDataPolicy.PROPAGATE
    missing_values: tuple[float, ...] = ()
    min_reliable_days: float = MIN_RELIABLE_DAYS

    def __post_init__(self) -> None:
        try:
            epochs = validate_epochs_per_day(self.epochs_per_day)
        except ValueError as e:
            raise ConfigurationError(str(e), ErrorCodes.CONFIG_INVALID) from e
        object.__setattr__(self, "epochs_per_day", epochs)

        try:
            policy = InsufficientDataPolicy(self.insufficient_data_policy)
        except ValueError as e:
            msg = f"Unknown insufficient_data_policy: {self.insufficient_data_policy!r}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID) from e
        object.__setattr__(self, "insufficient_data_policy", policy)

        missing = tuple(float(value) for value in self.missing_values)
        if any(math.isnan(value) for value in missing):
            msg = "missing_values must not contain NaN (NaN is always treated as missing)"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)
        object.__setattr__(self, "missing_values", missing)

        if self.min_reliable_days < 0:
            msg = f"min_reliable_days must be non-negative, got {self.min_reliable_days}"
            raise ConfigurationError(msg, ErrorCodes.CONFIG_INVALID)


# Preset configs
ONE_MINUTE_EPOCHS_CONFIG = SleepRegularityConfig(epochs_per_day=1440)

THIRTY_SECOND_EPOCHS_CONFIG = SleepRegularityConfig(epochs_per_day=2880)

FIFTEEN_MINUTE_EPOCHS_CONFIG = SleepRegularityConfig(epochs_per_day=96)
