"""Hypothesis configuration for property-based testing.

This module configures hypothesis profiles for different environments.
"""

import os

from hypothesis import HealthCheck, Verbosity, settings

# The autouse settings fixture in tests/conftest.py is function scoped
settings.register_profile(
    "ci",
    max_examples=100,
    deadline=2000,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    print_blob=True,
)

settings.register_profile(
    "dev",
    max_examples=50,
    deadline=1000,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    print_blob=True,
)

settings.register_profile(
    "debug",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    print_blob=True,
    verbosity=Verbosity.verbose,
)

settings.register_profile(
    "thorough",
    max_examples=1000,
    deadline=5000,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    print_blob=True,
)

# Default to dev profile, override with HYPOTHESIS_PROFILE env var
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
