"""
Tests for the DataFrame and object-based Sleep Regularity Index APIs.

Tests sri_score, sri_by_participant and the SleepRegularityIndex class.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd
import pytest

from sleep_regularity.core.algorithms.config import FIFTEEN_MINUTE_EPOCHS_CONFIG, SleepRegularityConfig
from sleep_regularity.core.algorithms.sri import SleepRegularityIndex, sri_by_participant, sri_score
from sleep_regularity.core.constants import AlgorithmType, InsufficientDataPolicy, RegularityStatus
from sleep_regularity.core.exceptions import ConfigurationError

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def scored_dataframe() -> pd.DataFrame:
    """Two days of 6-hour epochs with a 'Sleep Score' column (1=sleep, 0=wake)."""
    timestamps = pd.date_range("2024-01-15 00:00:00", periods=8, freq="6h")
    return pd.DataFrame({"datetime": timestamps, "Sleep Score": [1, 1, 0, 0, 1, 1, 0, 0]})


@pytest.fixture
def participants_dataframe() -> pd.DataFrame:
    """Two participants, one regular and one inverted, interleaved by participant id."""
    return pd.DataFrame(
        {
            "participant_id": ["P2"] * 8 + ["P1"] * 8,
            "Sleep Score": [1, 1, 0, 0, 0, 0, 1, 1] + [1, 1, 0, 0, 1, 1, 0, 0],
        }
    )


# ============================================================================
# Test sri_score
# ============================================================================


class TestSriScore:
    """Tests for sri_score function."""

    def test_scores_sleep_score_column(self, scored_dataframe: pd.DataFrame) -> None:
        """Reads the default 'Sleep Score' column."""
        result = sri_score(scored_dataframe, epochs_per_day=4)

        assert result.as_tuple() == (100.0, 1.0)

    def test_custom_column(self) -> None:
        """Reads a named column."""
        df = pd.DataFrame({"state": [1, -1, 1, -1, 1, -1]})

        result = sri_score(df, epochs_per_day=2, sleep_column="state")

        assert result.as_tuple() == (100.0, 2.0)

    def test_missing_values_in_column(self) -> None:
        """NaN and None entries are missing epochs."""
        df = pd.DataFrame({"Sleep Score": [0, 0, 1, None, 0, 0, 1, 1]})

        result = sri_score(df, epochs_per_day=4)

        assert result.as_tuple() == (100.0, 0.75)

    def test_does_not_modify_dataframe(self, scored_dataframe: pd.DataFrame) -> None:
        """Input DataFrame is unchanged."""
        original = scored_dataframe.copy()

        sri_score(scored_dataframe, epochs_per_day=4)

        pd.testing.assert_frame_equal(scored_dataframe, original)

    def test_missing_column_raises(self, scored_dataframe: pd.DataFrame) -> None:
        """Missing column raises ValueError."""
        with pytest.raises(ValueError, match="must contain 'state'"):
            sri_score(scored_dataframe, epochs_per_day=4, sleep_column="state")

    def test_empty_dataframe_raises(self) -> None:
        """Empty DataFrame raises ValueError."""
        with pytest.raises(ValueError, match="cannot be None or empty"):
            sri_score(pd.DataFrame({"Sleep Score": []}), epochs_per_day=4)

    def test_none_raises(self) -> None:
        """None raises ValueError."""
        with pytest.raises(ValueError, match="cannot be None or empty"):
            sri_score(None, epochs_per_day=4)


# ============================================================================
# Test sri_by_participant
# ============================================================================


class TestSriByParticipant:
    """Tests for sri_by_participant function."""

    def test_one_row_per_participant(self, participants_dataframe: pd.DataFrame) -> None:
        """Returns one row per participant sorted by id."""
        result = sri_by_participant(participants_dataframe, "participant_id", epochs_per_day=4)

        assert list(result["participant_id"]) == ["P1", "P2"]
        assert list(result.columns) == ["participant_id", "sri", "days", "valid_pairs", "matches", "status"]

    def test_values_per_participant(self, participants_dataframe: pd.DataFrame) -> None:
        """Each participant is scored independently."""
        result = sri_by_participant(participants_dataframe, "participant_id", epochs_per_day=4).set_index("participant_id")

        assert result.loc["P1", "sri"] == 100.0
        assert result.loc["P2", "sri"] == -100.0
        assert result.loc["P1", "days"] == 1.0
        assert result.loc["P2", "matches"] == 0
        assert (result["status"] == "ok").all()

    def test_invalid_participant_does_not_affect_others(self) -> None:
        """A badly encoded participant gets NaN without failing the batch."""
        df = pd.DataFrame(
            {
                "participant_id": ["A"] * 4 + ["B"] * 4,
                "Sleep Score": [0, 1, 0, 1] + [0, 1, 2, 1],
            }
        )

        result = sri_by_participant(df, "participant_id", epochs_per_day=2).set_index("participant_id")

        assert result.loc["A", "sri"] == 100.0
        assert math.isnan(result.loc["B", "sri"])
        assert result.loc["B", "status"] == RegularityStatus.INVALID_ENCODING

    def test_rows_without_participant_are_kept(self, caplog: pytest.LogCaptureFixture) -> None:
        """Rows with a missing participant id get their own result row and a warning."""
        df = pd.DataFrame(
            {
                "participant_id": ["A"] * 8 + [None] * 8,
                "Sleep Score": [1, 1, 0, 0, 1, 1, 0, 0] + [1, 1, 0, 0, 0, 0, 1, 1],
            }
        )

        with caplog.at_level(logging.WARNING):
            result = sri_by_participant(df, "participant_id", epochs_per_day=4)

        assert len(result) == 2
        assert result["participant_id"].iloc[0] == "A"
        assert pd.isna(result["participant_id"].iloc[1])
        assert result["sri"].iloc[1] == -100.0
        assert "8 rows have no 'participant_id'" in caplog.text

    def test_missing_participant_column_raises(self, participants_dataframe: pd.DataFrame) -> None:
        """Missing participant column raises ValueError."""
        with pytest.raises(ValueError, match="must contain 'subject'"):
            sri_by_participant(participants_dataframe, "subject", epochs_per_day=4)


# ============================================================================
# Test SleepRegularityIndex Class
# ============================================================================


class TestSleepRegularityIndex:
    """Tests for SleepRegularityIndex class."""

    def test_name_and_identifier(self) -> None:
        """Has display name and identifier."""
        algorithm = SleepRegularityIndex()

        assert algorithm.name == "Sleep Regularity Index (2017)"
        assert algorithm.identifier == AlgorithmType.SRI_PHILLIPS_2017

    def test_default_parameters(self) -> None:
        """Default parameters are 1-minute epochs."""
        params = SleepRegularityIndex().get_parameters()

        assert params == {
            "epochs_per_day": 1440,
            "insufficient_data_policy": "propagate",
            "missing_values": [],
            "min_reliable_days": 5.0,
        }

    def test_compute_uses_config(self) -> None:
        """compute uses the stored epochs_per_day."""
        algorithm = SleepRegularityIndex(SleepRegularityConfig(epochs_per_day=4))

        assert algorithm.compute([0, 0, 1, 1, 0, 0, 1, 1]).as_tuple() == (100.0, 1.0)

    def test_compute_dataframe(self) -> None:
        """compute_dataframe reads the sleep column."""
        df = pd.DataFrame({"Sleep Score": np.tile([1.0] * 32 + [0.0] * 64, 3)})
        algorithm = SleepRegularityIndex(FIFTEEN_MINUTE_EPOCHS_CONFIG)

        result = algorithm.compute_dataframe(df)

        assert result.as_tuple() == (100.0, 2.0)

    def test_set_parameters(self) -> None:
        """set_parameters replaces the config."""
        algorithm = SleepRegularityIndex()

        algorithm.set_parameters(epochs_per_day=4, missing_values=[-9], insufficient_data_policy="raise")

        assert algorithm.config.epochs_per_day == 4
        assert algorithm.config.missing_values == (-9.0,)
        assert algorithm.config.insufficient_data_policy == InsufficientDataPolicy.RAISE

    def test_set_parameters_numpy_epochs_per_day(self) -> None:
        """A numpy integer epochs_per_day is accepted."""
        algorithm = SleepRegularityIndex()

        algorithm.set_parameters(epochs_per_day=np.int64(4))

        assert algorithm.config.epochs_per_day == 4
        assert algorithm.compute([0, 0, 1, 1, 0, 0, 1, 1]).as_tuple() == (100.0, 1.0)

    def test_set_unknown_parameter_raises(self) -> None:
        """Unknown parameter names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown parameters"):
            SleepRegularityIndex().set_parameters(threshold=1.0)

    def test_set_invalid_value_raises(self) -> None:
        """Invalid values raise ConfigurationError and keep the old config."""
        algorithm = SleepRegularityIndex()

        with pytest.raises(ConfigurationError):
            algorithm.set_parameters(epochs_per_day=0)

        assert algorithm.config.epochs_per_day == 1440
