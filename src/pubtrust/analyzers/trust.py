"""Platform trust scorer."""

from dataclasses import dataclass

from pubtrust.analyzers.primitives import log_scale
from pubtrust.models.schemas import ReportOutcome, VerifiedPublisher


@dataclass
class TrustSignals:
    """Raw counts feeding the platform trust bonus."""

    plugin_count: int = 0
    downloads: int = 0
    plugin_positive_reviews: int = 0
    plugin_negative_reviews: int = 0
    positive_reviews: int = 0
    negative_reviews: int = 0
    successful_reports: int = 0
    failed_reports: int = 0


class PlatformTrustScorer:
    """Calculates a non-negative trust bonus from a publisher's platform history.

    Every signal is log-compressed with ln(count + 1) before weighting, so
    downloads and plugin volume dominate and a handful of negative reviews
    or rejected reports cannot erase an established profile.
    """

    # Signed weights applied to each log-scaled signal
    WEIGHTS = {
        "plugin_count": 500,
        "downloads": 450,
        "plugin_positive_reviews": 50,
        "plugin_negative_reviews": -300,
        "positive_reviews": 350,
        "negative_reviews": -300,
        "successful_reports": 350,
        "failed_reports": -450,
    }

    def summarize(self, publisher: VerifiedPublisher) -> TrustSignals:
        """Count the trust signals for a publisher."""
        signals = TrustSignals()

        for review in publisher.reviews:
            if review.is_positive:
                signals.positive_reviews += 1
            else:
                signals.negative_reviews += 1

        # Pending reports count toward neither side
        for report in publisher.reports:
            if report.resolved:
                signals.successful_reports += 1
            elif report.outcome in (ReportOutcome.INVALID, ReportOutcome.REJECTED):
                signals.failed_reports += 1

        for plugin in publisher.plugin_listings:
            signals.plugin_count += 1
            signals.downloads += plugin.downloads
            for review in plugin.reviews:
                if review.is_positive:
                    signals.plugin_positive_reviews += 1
                else:
                    signals.plugin_negative_reviews += 1

        return signals

    def calculate_bonus(self, publisher: VerifiedPublisher) -> float:
        """Calculate the trust bonus for a publisher.

        Returns:
            Weighted sum of log-scaled signals, clamped to >= 0.
        """
        signals = self.summarize(publisher)
        trust = sum(
            log_scale(getattr(signals, name)) * weight
            for name, weight in self.WEIGHTS.items()
        )
        return max(0.0, trust)
