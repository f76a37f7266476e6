"""Standardized Hypothesis settings profiles for property tests.

Provides consistent test intensity across all property test modules.
Import these instead of using inline @settings(max_examples=...).

Usage:
    from tests.property.settings import STANDARD_SETTINGS

    @given(host=hostnames)
    @STANDARD_SETTINGS
    def test_something(host):
        ...

Tiers:
- DETERMINISM_SETTINGS: 500 examples - same inputs, same decision
- STANDARD_SETTINGS: 100 examples - Regular property tests
- QUICK_SETTINGS: 20 examples - Fast validation tests (simple rejection)
"""

from hypothesis import settings

# Policies must be pure: rebuilt policies give identical decisions
DETERMINISM_SETTINGS = settings(max_examples=500)

# Standard property tests - good balance of coverage and speed
STANDARD_SETTINGS = settings(max_examples=100)

# Quick validation tests - fast tests where more examples add little value
QUICK_SETTINGS = settings(max_examples=20)
