"""Shared fixtures for pubtrust tests."""

from datetime import datetime, timedelta, timezone

import pytest

from pubtrust.analyzers import ContributionScorer
from pubtrust.models import Contributor, PluginListing, Review

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def _contributor(
    user_name: str = "alice",
    commit_count: int = 10,
    lines_added: int = 1000,
    lines_removed: int = 200,
    first_days_ago: float = 360,
    last_days_ago: float | None = 15,
) -> Contributor:
    return Contributor(
        user_name=user_name,
        commit_count=commit_count,
        lines_added=lines_added,
        lines_removed=lines_removed,
        first_contribution_date=_days_ago(first_days_ago),
        last_contribution_date=_days_ago(last_days_ago) if last_days_ago is not None else None,
    )


def _review(stars: int, reviewer: str = "bob") -> Review:
    return Review(reviewer=reviewer, date=_days_ago(5), stars=stars)


def _plugin(plugin_id: str = "p1", downloads: int = 0, stars: tuple[int, ...] = ()) -> PluginListing:
    return PluginListing(
        id=plugin_id,
        name=f"plugin-{plugin_id}",
        upload_date=_days_ago(100),
        downloads=downloads,
        reviews=[_review(s) for s in stars],
    )


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def days_ago():
    """Timestamps relative to the fixed test clock."""
    return _days_ago


@pytest.fixture
def make_contributor():
    return _contributor


@pytest.fixture
def make_review():
    return _review


@pytest.fixture
def make_plugin():
    return _plugin


@pytest.fixture
def scorer(clock):
    return ContributionScorer(clock=clock)
