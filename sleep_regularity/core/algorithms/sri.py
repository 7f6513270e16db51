"""
Sleep Regularity Index (SRI) - Framework-agnostic implementation.

This module computes the Sleep Regularity Index from scored epoch-by-epoch
sleep/wake data. The SRI is the percentage probability that an individual is
in the same state (asleep vs awake) at any two time points 24 hours apart,
rescaled so that 100 means perfectly repeating and 0 means chance level.

References:
    Phillips, A. J. K., Clerx, W. M., O'Brien, C. S., et al. (2017).
    Irregular sleep/wake patterns are associated with poorer academic
    performance and delayed circadian and sleep/wake timing.
    Scientific Reports, 7(1), 3216.

Algorithm Details:
    - Input is a gap-free series with one state code per epoch
    - Any two numeric codes are accepted (e.g. 1=wake/0=sleep or 1=wake/-1=sleep)
    - Missing or excluded epochs are NaN (any non-finite value is missing)
    - The series is compared with itself shifted by exactly one day (n epochs)
    - Valid pairs: positions where both the epoch and the epoch 24h later are present
    - Matches: valid pairs whose two states are equal
    - Formula: SRI = 200 * matches / valid_pairs - 100
    - Days: valid_pairs / n (with no missing data, recorded days minus 1)

Interpretation:
    - A typical population range is roughly 30 to 90
    - Negative values are possible but rarely occur outside contrived
      circumstances, and usually indicate bad data
    - With fewer than 5 valid days the SRI is unlikely to be a reliable
      estimator of sleep regularity

"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from sleep_regularity.core.constants import SRI_MAX, SRI_MIN, AlgorithmType, InsufficientDataPolicy, RegularityColumn, RegularityStatus
from sleep_regularity.core.exceptions import ErrorCodes, InsufficientDataError, InvalidEncodingError

from .config import SleepRegularityConfig
from .utils import to_epoch_array, validate_epochs_per_day

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

# Number of distinct state codes a valid series uses
STATE_CODE_COUNT: int = 2

INVALID_ENCODING_MESSAGE: str = "There are not two types of numerical values in the epoch series (either more or less)"

DEFAULT_CONFIG = SleepRegularityConfig()


@dataclass(frozen=True)
class SleepRegularityResult:
    """
    Outcome of a Sleep Regularity Index computation.

    Attributes:
        sri: Sleep Regularity Index in [-100, 100], or NaN
        days: Valid comparison days (valid_pairs / epochs_per_day), or NaN on invalid encoding
        valid_pairs: Number of 24h-shifted epoch pairs with no missing value
        matches: Number of valid pairs in the same state
        epochs_per_day: Epochs per 24 hours used for the shift
        state_codes: Distinct non-missing codes found in the series
        status: OK, INVALID_ENCODING or INSUFFICIENT_DATA
        message: Diagnostic message when status is not OK
        min_reliable_days: Valid days required for is_reliable

    """

    sri: float
    days: float
    valid_pairs: int
    matches: int
    epochs_per_day: int
    state_codes: tuple[float, ...]
    status: RegularityStatus = RegularityStatus.OK
    message: str | None = None
    min_reliable_days: float = DEFAULT_CONFIG.min_reliable_days

    @property
    def is_valid(self) -> bool:
        """True when an SRI value was computed."""
        return self.status == RegularityStatus.OK

    @property
    def is_reliable(self) -> bool:
        """True when the SRI was computed from at least min_reliable_days valid days."""
        return self.is_valid and self.days >= self.min_reliable_days

    def as_tuple(self) -> tuple[float, float]:
        """Return ``(sri, days)``."""
        return self.sri, self.days

    def raise_for_status(self) -> None:
        """
        Raise the matching exception when no SRI value was computed.

        Raises:
            InvalidEncodingError: If the series did not use exactly two state codes
            InsufficientDataError: If no valid comparison pair existed

        """
        context = {"epochs_per_day": self.epochs_per_day, "state_codes": list(self.state_codes)}
        if self.status == RegularityStatus.INVALID_ENCODING:
            raise InvalidEncodingError(self.message or INVALID_ENCODING_MESSAGE, ErrorCodes.INVALID_ENCODING, context)
        if self.status == RegularityStatus.INSUFFICIENT_DATA:
            raise InsufficientDataError(self.message or "No valid 24-hour comparison pairs", ErrorCodes.INSUFFICIENT_DATA, context)

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["status"] = str(self.status)
        result["state_codes"] = list(self.state_codes)
        return result


def validate_encoding(series: Sequence[float] | np.ndarray) -> tuple[bool, tuple[float, ...]]:
    """
    Check that a series uses exactly two distinct non-missing state codes.

    Args:
        series: Epoch series with NaN for missing epochs

    Returns:
        Tuple of (is_valid, sorted distinct finite codes)

    """
    values = np.asarray(series, dtype=np.float64)
    codes = np.unique(values[np.isfinite(values)])
    return len(codes) == STATE_CODE_COUNT, tuple(codes.tolist())


def align_day_shift(series: Sequence[float] | np.ndarray, epochs_per_day: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Build the two views of the series that lie exactly 24 hours apart.

    Args:
        series: Epoch series with NaN for missing epochs
        epochs_per_day: Number of epochs in 24 hours

    Returns:
        Tuple of (today, tomorrow) where tomorrow[i] is the epoch one day after today[i].
        Both views are empty when the series is not longer than one day.

    """
    n = validate_epochs_per_day(epochs_per_day)
    values = np.asarray(series, dtype=np.float64)

    if len(values) <= n:
        return values[:0], values[:0]

    return values[:-n], values[n:]


def count_concordance(today: np.ndarray, tomorrow: np.ndarray) -> tuple[int, int]:
    """
    Count valid epoch pairs and matching pairs between two aligned views.

    A pair is valid only when both values are finite; the test is made on
    each element separately so that no product of codes can overflow.

    Args:
        today: Epoch values
        tomorrow: Epoch values 24 hours later, same length as today

    Returns:
        Tuple of (valid_pairs, matches)

    Raises:
        ValueError: If the views differ in length

    """
    today = np.asarray(today, dtype=np.float64)
    tomorrow = np.asarray(tomorrow, dtype=np.float64)

    if today.shape != tomorrow.shape:
        msg = f"Aligned views must have the same length, got {len(today)} and {len(tomorrow)}"
        raise ValueError(msg)

    valid = np.isfinite(today) & np.isfinite(tomorrow)
    valid_pairs = int(np.count_nonzero(valid))
    matches = int(np.count_nonzero(today[valid] == tomorrow[valid]))

    return valid_pairs, matches


def normalize_index(matches: int, valid_pairs: int) -> float:
    """
    Map the fraction of matching pairs onto the [-100, 100] SRI scale.

    Raises:
        InsufficientDataError: If there are no valid pairs
        ValueError: If the counts are inconsistent

    """
    if valid_pairs == 0:
        msg = "No valid 24-hour comparison pairs; the Sleep Regularity Index is undefined"
        raise InsufficientDataError(msg, ErrorCodes.INSUFFICIENT_DATA)

    if valid_pairs < 0 or not 0 <= matches <= valid_pairs:
        msg = f"Invalid counts: matches={matches}, valid_pairs={valid_pairs}"
        raise ValueError(msg)

    return SRI_MIN + (SRI_MAX - SRI_MIN) * matches / valid_pairs


def compute_sleep_regularity(
    series: Sequence[float] | np.ndarray | pd.Series,
    epochs_per_day: int | None = None,
    config: SleepRegularityConfig | None = None,
) -> SleepRegularityResult:
    """
    Compute the Sleep Regularity Index with all intermediate counts.

    Args:
        series: Scored sleep/wake state per epoch, two numeric codes, NaN for missing
        epochs_per_day: Epochs per 24 hours (overrides config.epochs_per_day)
        config: Computation settings (default: 1-minute epochs, propagate insufficient data)

    Returns:
        SleepRegularityResult. On invalid encoding both sri and days are NaN.

    Raises:
        ValueError: If the series or epochs_per_day is malformed
        InsufficientDataError: If no valid pair exists and the policy is RAISE

    Example:
        >>> result = compute_sleep_regularity([0, 0, 1, 1, 0, 0, 1, 1], epochs_per_day=4)
        >>> result.sri, result.days
        (100.0, 1.0)

    """
    config = config or DEFAULT_CONFIG
    n = validate_epochs_per_day(config.epochs_per_day if epochs_per_day is None else epochs_per_day)
    values = to_epoch_array(series, config.missing_values)

    is_valid, codes = validate_encoding(values)
    if not is_valid:
        message = f"{INVALID_ENCODING_MESSAGE}: found {len(codes)} distinct value(s) {list(codes)[:10]}"
        logger.warning(message)
        return SleepRegularityResult(
            sri=float("nan"),
            days=float("nan"),
            valid_pairs=0,
            matches=0,
            epochs_per_day=n,
            state_codes=codes,
            status=RegularityStatus.INVALID_ENCODING,
            message=message,
            min_reliable_days=config.min_reliable_days,
        )

    logger.debug(f"Computing SRI on {len(values)} epochs with {n} epochs per day")

    today, tomorrow = align_day_shift(values, n)
    valid_pairs, matches = count_concordance(today, tomorrow)
    days = valid_pairs / n

    try:
        sri = normalize_index(matches, valid_pairs)
    except InsufficientDataError as e:
        context = {"epochs": len(values), "epochs_per_day": n}
        if config.insufficient_data_policy == InsufficientDataPolicy.RAISE:
            raise InsufficientDataError(e.message, ErrorCodes.INSUFFICIENT_DATA, context) from e

        message = f"{e.message} ({len(values)} epochs, {n} epochs per day)"
        logger.warning(message)
        return SleepRegularityResult(
            sri=float("nan"),
            days=0.0,
            valid_pairs=0,
            matches=0,
            epochs_per_day=n,
            state_codes=codes,
            status=RegularityStatus.INSUFFICIENT_DATA,
            message=message,
            min_reliable_days=config.min_reliable_days,
        )

    if days < config.min_reliable_days:
        logger.warning(f"SRI computed from only {days:.2f} valid days (< {config.min_reliable_days}); the estimate is unlikely to be reliable")

    if sri < 0:
        logger.warning(f"Negative SRI ({sri:.2f}); negative values are rare and may indicate bad data")

    logger.debug(f"SRI={sri:.2f} from {matches}/{valid_pairs} matching pairs over {days:.2f} days")

    return SleepRegularityResult(
        sri=sri,
        days=days,
        valid_pairs=valid_pairs,
        matches=matches,
        epochs_per_day=n,
        state_codes=codes,
        min_reliable_days=config.min_reliable_days,
    )


def calculate_sri(series: Sequence[float] | np.ndarray | pd.Series, epochs_per_day: int) -> tuple[float, float]:
    """
    Calculate the Sleep Regularity Index and number of valid days.

    Args:
        series: Scored sleep/wake state per epoch, two numeric codes, NaN for missing
        epochs_per_day: Epochs per 24 hours (e.g. 1440 for 1-minute epochs)

    Returns:
        Tuple of (sri, days). Both are NaN when the series does not use
        exactly two state codes. When no valid pair exists sri is NaN and days is 0.0.

    Example:
        >>> calculate_sri([0, 0, 1, np.nan, 0, 0, 1, 1], epochs_per_day=4)
        (100.0, 0.75)

    """
    return compute_sleep_regularity(series, epochs_per_day).as_tuple()


def sri_score(
    df: pd.DataFrame,
    epochs_per_day: int | None = None,
    sleep_column: str = RegularityColumn.SLEEP_SCORE,
    config: SleepRegularityConfig | None = None,
) -> SleepRegularityResult:
    """
    Compute the Sleep Regularity Index from a scored DataFrame.

    The rows must already be in time order with one row per epoch and no
    gaps, as produced by the sleep/wake scoring algorithms.

    Args:
        df: DataFrame with a sleep/wake state column
        epochs_per_day: Epochs per 24 hours (overrides config.epochs_per_day)
        sleep_column: Column holding the state codes (default: 'Sleep Score')
        config: Computation settings

    Returns:
        SleepRegularityResult

    Raises:
        ValueError: If the DataFrame is None or empty, or the column is missing

    """
    if df is None or len(df) == 0:
        msg = "DataFrame cannot be None or empty"
        raise ValueError(msg)

    if sleep_column not in df.columns:
        msg = f"DataFrame must contain '{sleep_column}' column"
        raise ValueError(msg)

    return compute_sleep_regularity(df[sleep_column].to_numpy(dtype=np.float64, na_value=np.nan), epochs_per_day, config)


def sri_by_participant(
    df: pd.DataFrame,
    participant_column: str,
    epochs_per_day: int | None = None,
    sleep_column: str = RegularityColumn.SLEEP_SCORE,
    config: SleepRegularityConfig | None = None,
) -> pd.DataFrame:
    """
    Compute the Sleep Regularity Index separately for each participant.

    Each participant's rows are used in their original order. Rows with a
    missing participant id are scored together as one extra group (id NaN).

    Args:
        df: DataFrame with participant and sleep/wake state columns
        participant_column: Column identifying the participant
        epochs_per_day: Epochs per 24 hours (overrides config.epochs_per_day)
        sleep_column: Column holding the state codes (default: 'Sleep Score')
        config: Computation settings

    Returns:
        DataFrame with one row per participant and columns
        participant_column, sri, days, valid_pairs, matches, status

    """
    if df is None or len(df) == 0:
        msg = "DataFrame cannot be None or empty"
        raise ValueError(msg)

    for column in (participant_column, sleep_column):
        if column not in df.columns:
            msg = f"DataFrame must contain '{column}' column"
            raise ValueError(msg)

    unidentified = int(df[participant_column].isna().sum())
    if unidentified:
        logger.warning(f"{unidentified} rows have no '{participant_column}'; scoring them as one unidentified participant")

    rows = []
    for participant, group in df.groupby(participant_column, sort=True, dropna=False):
        result = sri_score(group, epochs_per_day, sleep_column, config)
        rows.append(
            {
                participant_column: participant,
                RegularityColumn.SRI: result.sri,
                RegularityColumn.DAYS: result.days,
                RegularityColumn.VALID_PAIRS: result.valid_pairs,
                RegularityColumn.MATCHES: result.matches,
                RegularityColumn.STATUS: str(result.status),
            }
        )

    logger.debug(f"Computed SRI for {len(rows)} participants")

    columns = [
        participant_column,
        RegularityColumn.SRI,
        RegularityColumn.DAYS,
        RegularityColumn.VALID_PAIRS,
        RegularityColumn.MATCHES,
        RegularityColumn.STATUS,
    ]
    return pd.DataFrame(rows, columns=[str(column) for column in columns])


class SleepRegularityIndex:
    """
    Sleep Regularity Index (Phillips 2017) - algorithm object.

    Wraps the function-based API with a stored configuration, in the same
    shape as the sleep/wake scoring algorithm classes.

    Example:
        >>> algorithm = SleepRegularityIndex(SleepRegularityConfig(epochs_per_day=96))
        >>> algorithm.name
        'Sleep Regularity Index (2017)'
        >>> result = algorithm.compute(sleep_wake_states)

    """

    def __init__(self, config: SleepRegularityConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def name(self) -> str:
        """Algorithm name for display."""
        return "Sleep Regularity Index (2017)"

    @property
    def identifier(self) -> str:
        """Unique algorithm identifier."""
        return AlgorithmType.SRI_PHILLIPS_2017

    @property
    def config(self) -> SleepRegularityConfig:
        return self._config

    def compute(self, series: Sequence[float] | np.ndarray | pd.Series) -> SleepRegularityResult:
        """Compute the SRI for one epoch series."""
        return compute_sleep_regularity(series, config=self._config)

    def compute_dataframe(self, df: pd.DataFrame, sleep_column: str = RegularityColumn.SLEEP_SCORE) -> SleepRegularityResult:
        """Compute the SRI from a scored DataFrame column."""
        return sri_score(df, sleep_column=sleep_column, config=self._config)

    def get_parameters(self) -> dict[str, Any]:
        """
        Get current algorithm parameters.

        Returns:
            Dictionary of parameter names and values

        """
        return {
            "epochs_per_day": self._config.epochs_per_day,
            "insufficient_data_policy": str(self._config.insufficient_data_policy),
            "missing_values": list(self._config.missing_values),
            "min_reliable_days": self._config.min_reliable_days,
        }

    def set_parameters(self, **kwargs: Any) -> None:
        """
        Update algorithm parameters.

        Args:
            **kwargs: Parameter name-value pairs

        Raises:
            ValueError: If a parameter name is unknown
            ConfigurationError: If a value is invalid

        """
        unknown = set(kwargs) - set(self.get_parameters())
        if unknown:
            msg = f"Unknown parameters for {self.name}: {sorted(unknown)}"
            raise ValueError(msg)

        if "missing_values" in kwargs:
            kwargs["missing_values"] = tuple(kwargs["missing_values"])

        self._config = replace(self._config, **kwargs)
        logger.debug(f"Updated {self.name} parameters: {sorted(kwargs)}")
