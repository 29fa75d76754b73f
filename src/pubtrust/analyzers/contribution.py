"""Code contribution scorer."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from pubtrust.analyzers.primitives import (
    OVERFLOW_CAP,
    abuse_penalty_factor,
    as_utc,
    compress_overflow,
    longevity_factor,
    months_between,
    recency_factor,
)
from pubtrust.models.schemas import ContributionScore, Contributor, InvalidRecordError

logger = logging.getLogger(__name__)

AUTOMATION_MARKER = "[bot]"
AUTOMATION_SCORE = -1.0


def is_automation_account(user_name: str, marker: str = AUTOMATION_MARKER) -> bool:
    """Check whether a user name carries the automation marker."""
    return marker.lower() in user_name.lower()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContributionScorer:
    """Maps a contributor's activity metrics to a single score.

    score = base * recency * (0.7 + 0.3 * longevity), then an abuse
    penalty for high commit counts with tiny commits, then overflow
    compression above the cap. Automation accounts score -1.
    """

    # Base score weights
    WEIGHTS = {
        "commits": 0.3,
        "net_lines": 0.02,
        "lines_added": 0.05,
        "lines_removed": 0.025,
    }

    BURST_RECENCY_THRESHOLD = 1.4  # Only penalize drive-bys in the top tiers
    BURST_PENALTY = 0.75
    ABUSE_MIN_COMMITS = 50

    def __init__(
        self,
        automation_classifier: Callable[[str], bool] | None = None,
        clock: Callable[[], datetime] | None = None,
        score_cap: float = OVERFLOW_CAP,
    ) -> None:
        """Initialize the scorer.

        Args:
            automation_classifier: Predicate flagging automation accounts by
                user name. Defaults to matching "[bot]".
            clock: Returns the current time. Defaults to UTC now.
            score_cap: Scores above this are logarithmically compressed.
        """
        self.is_automation = automation_classifier or is_automation_account
        self.clock = clock or utc_now
        self.score_cap = score_cap

    def score(self, contributor: Contributor) -> float:
        """Calculate the contribution score for a contributor."""
        return self.score_breakdown(contributor).score

    def score_breakdown(self, contributor: Contributor) -> ContributionScore:
        """Calculate the contribution score with all intermediate factors.

        Raises:
            InvalidRecordError: If a count on the record is negative.
        """
        if self.is_automation(contributor.user_name):
            return ContributionScore(
                user_name=contributor.user_name,
                score=AUTOMATION_SCORE,
                raw_score=AUTOMATION_SCORE,
                is_automation=True,
            )

        self._validate(contributor)

        first = as_utc(contributor.first_contribution_date)
        last = as_utc(contributor.last_contribution_date or first)

        months_since_last = months_between(last, self.clock())
        recency = recency_factor(months_since_last)

        # Entire history is a single burst of recent activity
        if first == last and recency > self.BURST_RECENCY_THRESHOLD:
            recency *= self.BURST_PENALTY

        active_months = months_between(first, last)
        longevity = longevity_factor(active_months)

        base = self._base_score(contributor)
        score = base * recency * (0.7 + 0.3 * longevity)

        penalty = None
        if contributor.commit_count >= self.ABUSE_MIN_COMMITS:
            total_lines = contributor.lines_added + contributor.lines_removed
            penalty = abuse_penalty_factor(total_lines / contributor.commit_count)
            score *= penalty
            logger.info(
                f"Abuse penalty for {contributor.user_name}: "
                f"{total_lines / contributor.commit_count:.2f} lines/commit, "
                f"factor {penalty:.2f}"
            )

        return ContributionScore(
            user_name=contributor.user_name,
            score=compress_overflow(score, self.score_cap),
            base_score=base,
            recency_factor=recency,
            longevity_factor=longevity,
            months_since_last_contribution=months_since_last,
            active_months=active_months,
            abuse_penalty=penalty,
            raw_score=score,
        )

    def _base_score(self, contributor: Contributor) -> float:
        net_lines = max(0, contributor.lines_added - contributor.lines_removed)
        return (
            contributor.commit_count * self.WEIGHTS["commits"]
            + net_lines * self.WEIGHTS["net_lines"]
            + contributor.lines_added * self.WEIGHTS["lines_added"]
            + contributor.lines_removed * self.WEIGHTS["lines_removed"]
        )

    def _validate(self, contributor: Contributor) -> None:
        for field in ("commit_count", "lines_added", "lines_removed"):
            value = getattr(contributor, field)
            if value < 0:
                raise InvalidRecordError(contributor.user_name, field, value)
