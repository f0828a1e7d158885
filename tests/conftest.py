"""Shared pytest configuration for all test levels."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from commit_watcher.feeds import Destination, FeedRegistry, FeedSession

FEED_URL = "http://github.com/feeds/bschmalhofer/commits/eclectus/master"


@pytest.fixture
def session() -> FeedSession:
    return FeedSession(
        key="eclectuslog",
        name="eclectus",
        url=FEED_URL,
        interval_seconds=301,
        destinations=[Destination("magnet", "#parrot")],
    )


@pytest.fixture
def registry() -> FeedRegistry:
    return FeedRegistry(base_interval=300)


# Configure Hypothesis global settings
settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile(
    "ci",
    max_examples=100,
    deadline=5000,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

if os.getenv("CI"):
    settings.load_profile("ci")
else:
    settings.load_profile("dev")


_LEVEL_MARKERS = {
    "unit": pytest.mark.unit,
    "integration": pytest.mark.integration,
}


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        rel = item.path.relative_to(Path(__file__).resolve().parent) if item.path else None
        if rel is None:
            continue
        for level, marker in _LEVEL_MARKERS.items():
            if rel.parts[0] == level:
                item.add_marker(marker)
                break
