"""Pytest configuration for the pcengine test suite.

Hypothesis profiles (max_examples is set here and nowhere else):
- dev: 500 examples per property, for local runs over generated grammars
- ci: 50 derandomized examples, so CI failures reproduce
- verbose: 100 examples with per-example output, for debugging a strategy

The profile comes from HYPOTHESIS_PROFILE if set, else "ci" when CI=true,
else "dev":

    HYPOTHESIS_PROFILE=verbose pytest tests/test_combinators_hypothesis.py

Fuzz tests:
The `fuzz` marker tags the long-running properties in
test_combinators_hypothesis.py (List termination over arbitrary parser
trees). They are skipped unless selected with: pytest -m fuzz
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]
_PROFILES = ("dev", "ci", "verbose")

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile("dev", max_examples=500, phases=_PHASES)
settings.register_profile(
    "ci", max_examples=50, phases=_PHASES, derandomize=True, print_blob=True
)
settings.register_profile(
    "verbose", max_examples=100, phases=_PHASES, verbosity=Verbosity.verbose
)


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the `fuzz` marker."""
    config.addinivalue_line(
        "markers",
        "fuzz: long-running combinator properties (run with: pytest -m fuzz)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz tests unless the -m expression asks for them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="fuzz test; run with: pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)
