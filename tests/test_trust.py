"""Tests for the platform trust scorer."""

import math

import pytest

from pubtrust.analyzers import PlatformTrustScorer
from pubtrust.models import Report, ReportOutcome, VerifiedPublisher


@pytest.fixture
def trust():
    return PlatformTrustScorer()


@pytest.fixture
def make_report(days_ago):
    def build(outcome: ReportOutcome) -> Report:
        return Report(reporter="mod", date=days_ago(3), details="spam", outcome=outcome)

    return build


def test_empty_profile_has_zero_bonus(trust):
    assert trust.calculate_bonus(VerifiedPublisher(user_name="nobody")) == 0.0

def test_plugin_and_downloads(trust, make_plugin):
    publisher = VerifiedPublisher(user_name="pub", plugin_listings=[make_plugin(downloads=100)])
    expected = math.log(2) * 500 + math.log(101) * 450
    assert trust.calculate_bonus(publisher) == pytest.approx(expected)

def test_downloads_summed_across_plugins(trust, make_plugin):
    publisher = VerifiedPublisher(
        user_name="pub",
        plugin_listings=[make_plugin("a", downloads=40), make_plugin("b", downloads=60)],
    )
    signals = trust.summarize(publisher)
    assert signals.plugin_count == 2
    assert signals.downloads == 100

def test_review_counts(trust, make_plugin, make_review):
    publisher = VerifiedPublisher(
        user_name="pub",
        reviews=[make_review(5), make_review(4), make_review(3), make_review(1)],
        plugin_listings=[make_plugin(stars=(5, 2, 2))],
    )
    signals = trust.summarize(publisher)
    assert signals.positive_reviews == 2
    assert signals.negative_reviews == 2
    assert signals.plugin_positive_reviews == 1
    assert signals.plugin_negative_reviews == 2

def test_report_counts_ignore_pending(trust, make_report):
    publisher = VerifiedPublisher(
        user_name="pub",
        reports=[
            make_report(ReportOutcome.VALID),
            make_report(ReportOutcome.INVALID),
            make_report(ReportOutcome.REJECTED),
            make_report(ReportOutcome.PENDING),
        ],
    )
    signals = trust.summarize(publisher)
    assert signals.successful_reports == 1
    assert signals.failed_reports == 2

def test_pending_reports_do_not_change_bonus(trust, make_review, make_report):
    base = VerifiedPublisher(user_name="pub", reviews=[make_review(5)])
    pending = base.model_copy(update={"reports": [make_report(ReportOutcome.PENDING)] * 3})
    assert trust.calculate_bonus(pending) == trust.calculate_bonus(base)

def test_negative_signals_clamped_to_zero(trust, make_review):
    publisher = VerifiedPublisher(user_name="pub", reviews=[make_review(1), make_review(2)])
    assert trust.calculate_bonus(publisher) == 0.0

def test_full_formula(trust, make_plugin, make_review, make_report):
    publisher = VerifiedPublisher(
        user_name="pub",
        plugin_listings=[make_plugin(downloads=1000, stars=(5, 1))],
        reviews=[make_review(5), make_review(5), make_review(2)],
        reports=[make_report(ReportOutcome.VALID), make_report(ReportOutcome.INVALID)],
    )
    ln = math.log
    expected = (
        ln(2) * 500
        + ln(1001) * 450
        + ln(2) * 50
        - ln(2) * 300
        + ln(3) * 350
        - ln(2) * 300
        + ln(2) * 350
        - ln(2) * 450
    )
    assert trust.calculate_bonus(publisher) == pytest.approx(expected)

def test_established_profile_survives_a_few_complaints(trust, make_plugin, make_review):
    publisher = VerifiedPublisher(
        user_name="pub",
        plugin_listings=[make_plugin(downloads=50_000, stars=(5,) * 20)],
        reviews=[make_review(1)] * 3,
    )
    assert trust.calculate_bonus(publisher) > 4000

def test_review_positivity_threshold(make_review):
    assert make_review(4).is_positive
    assert not make_review(3).is_positive

def test_report_resolved_only_when_valid(make_report):
    assert make_report(ReportOutcome.VALID).resolved
    assert not make_report(ReportOutcome.REJECTED).resolved
