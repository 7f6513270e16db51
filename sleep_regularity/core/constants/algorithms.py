"""
Algorithm-related constants for Sleep Regularity Analysis.

Contains enums and constants for the Sleep Regularity Index (SRI) and
related parameters.
"""

from enum import StrEnum

SECONDS_PER_DAY: int = 24 * 60 * 60
DEFAULT_EPOCHS_PER_DAY: int = 24 * 60  # 1-minute epochs

# Bounds of the index scale (not clamped, reached by construction)
SRI_MIN: float = -100.0
SRI_MAX: float = 100.0

# Fewer valid days than this rarely gives a reliable SRI estimate
MIN_RELIABLE_DAYS: float = 5.0


class AlgorithmType(StrEnum):
    """Regularity algorithm identifiers."""

    SRI_PHILLIPS_2017 = "sri_phillips_2017"

    @classmethod
    def get_default(cls) -> "AlgorithmType":
        """Get the default regularity algorithm type."""
        return cls.SRI_PHILLIPS_2017


class InsufficientDataPolicy(StrEnum):
    """
    What to do when no valid 24-hour comparison pair exists.

    Attributes:
        PROPAGATE: Return NaN for SRI and 0.0 for Days, flagged by status
        RAISE: Raise InsufficientDataError

    """

    PROPAGATE = "propagate"
    RAISE = "raise"


class RegularityStatus(StrEnum):
    """Outcome of a single SRI computation."""

    OK = "ok"
    INVALID_ENCODING = "invalid_encoding"
    INSUFFICIENT_DATA = "insufficient_data"


class RegularityColumn(StrEnum):
    """DataFrame column names read and written by the regularity functions."""

    SLEEP_SCORE = "Sleep Score"
    SRI = "sri"
    DAYS = "days"
    VALID_PAIRS = "valid_pairs"
    MATCHES = "matches"
    STATUS = "status"
