#!/usr/bin/env python3
"""
Custom Exception Classes for Sleep Regularity Analysis
Provides structured error handling with specific exception types.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class SleepRegularityError(Exception):
    """Base exception for all sleep regularity errors."""

    def __init__(self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class InvalidEncodingError(SleepRegularityError):
    """Raised when an epoch series does not use exactly two state codes."""


class InsufficientDataError(SleepRegularityError):
    """Raised when no valid 24-hour comparison pair exists."""


class ConfigurationError(SleepRegularityError):
    """Raised when configuration is invalid."""


class ErrorCodes(StrEnum):
    """Standardized error codes."""

    INVALID_ENCODING = "INVALID_ENCODING"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"
    CONFIG_INVALID = "CONFIG_INVALID"
