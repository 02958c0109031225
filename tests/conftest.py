# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from regexpomatic.contracts import Record

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


NAMESPACE = ("intel", "logs", "metric", "log", "message")
FEATURE_PARSE = r"^feature (?P<feature_name>[A-Za-z0-9]*)$"
FEATURE_GATE = r"^feature (?P<feature_name>[A-Za-z0-9]*)"


def make_record(data: Any, tags: dict[str, str] | None = None, **kwargs: Any) -> Record:
    """Build a record in the shape the host sends."""
    kwargs.setdefault("timestamp", datetime(2016, 12, 7, 6, 0, 12, tzinfo=UTC))
    return Record(
        namespace=NAMESPACE,
        data=data,
        tags={"hello": "world", "replaceme": "boo"} if tags is None else tags,
        **kwargs,
    )


@pytest.fixture
def record_factory() -> Callable[..., Record]:
    """Factory for host-shaped records."""
    return make_record
