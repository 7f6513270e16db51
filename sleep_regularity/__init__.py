#!/usr/bin/env python3
"""
Sleep Regularity.

Computes the Sleep Regularity Index (SRI) from scored epoch-by-epoch sleep/wake data.
"""

__version__ = "0.1.0"
__author__ = "Sleep Research Team"
__description__ = "Sleep Regularity Index computation for scored sleep/wake data"
