#!/usr/bin/env python3
"""
Shared test fixtures for sleep regularity analysis.
Provides common test setup and utilities.
"""

from __future__ import annotations

import numpy as np
import pytest


def pytest_configure(config):
    """Register test markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible synthetic epoch series."""
    return np.random.default_rng(12345)
