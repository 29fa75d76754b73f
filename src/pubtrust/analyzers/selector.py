"""Verified publisher selection."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from functools import partial

from pubtrust.analyzers.contribution import ContributionScorer, is_automation_account
from pubtrust.analyzers.trust import PlatformTrustScorer
from pubtrust.config import Settings
from pubtrust.models.schemas import (
    AdmissionReason,
    ContributionScore,
    Contributor,
    InvalidRecordError,
    SelectionResult,
    VerifiedPublisher,
)
from pubtrust.monitoring.audit import AuditKind, AuditLog

logger = logging.getLogger(__name__)


class PublisherSelector:
    """Builds the verified publisher list from contributors and an allow-list.

    Selection stages:
    1. Score every contributor and rank by score (stable, input order breaks ties)
    2. Admit the top N unconditionally
    3. Admit the rest if their score reaches the admission threshold
    4. Merge in manually trusted publishers not already admitted
    5. Add the platform trust bonus to every admitted publisher, once
    """

    def __init__(
        self,
        settings: Settings | None = None,
        trusted_publishers: Iterable[VerifiedPublisher] = (),
        contribution_scorer: ContributionScorer | None = None,
        trust_scorer: PlatformTrustScorer | None = None,
        strict: bool = False,
    ) -> None:
        """Initialize the selector.

        Args:
            settings: Selection settings. Defaults to Settings().
            trusted_publishers: Manually trusted publisher records, each with
                its platform profile populated. Never modified.
            contribution_scorer: Scorer for code contributions.
            trust_scorer: Scorer for the platform trust bonus.
            strict: Re-raise InvalidRecordError instead of skipping the record.
        """
        self.settings = settings or Settings()
        self.trusted_publishers = tuple(trusted_publishers)
        self.contribution_scorer = contribution_scorer or ContributionScorer(
            automation_classifier=partial(
                is_automation_account, marker=self.settings.automation_marker
            ),
            score_cap=self.settings.score_cap,
        )
        self.trust_scorer = trust_scorer or PlatformTrustScorer()
        self.strict = strict

    def select(
        self,
        contributors: Sequence[Contributor],
        trusted_publishers: Iterable[VerifiedPublisher] | None = None,
        profiles: Mapping[str, VerifiedPublisher] | None = None,
        audit: AuditLog | None = None,
    ) -> SelectionResult:
        """Run the full selection over a set of contributors.

        Args:
            contributors: Contributor records. Order only matters for ties.
            trusted_publishers: Overrides the allow-list given at construction.
            profiles: Platform profiles by user name, attached to publishers
                admitted from contributor ranking.
            audit: Log to record exclusion and abuse events into. Defaults to
                a fresh log for this run.

        Returns:
            SelectionResult with admitted publishers in admission order and the
            audit log for this run.
        """
        trusted = (
            self.trusted_publishers
            if trusted_publishers is None
            else tuple(trusted_publishers)
        )
        audit = AuditLog() if audit is None else audit

        scored = self._score_contributors(contributors, audit)
        ranked = sorted(scored, key=lambda pair: pair[1].score, reverse=True)

        profiles = profiles or {}
        publishers: list[VerifiedPublisher] = []
        excluded: list[str] = []

        for rank, (contributor, breakdown) in enumerate(ranked):
            if rank < self.settings.top_n:
                reason = AdmissionReason.TOP_N
            elif breakdown.score >= self.settings.admission_threshold:
                reason = AdmissionReason.ABOVE_THRESHOLD
            else:
                excluded.append(contributor.user_name)
                audit.record(
                    contributor.user_name,
                    AuditKind.EXCLUDED,
                    f"Score {breakdown.score:.2f} below threshold "
                    f"{self.settings.admission_threshold:.2f}",
                    score=breakdown.score,
                )
                continue

            publisher = VerifiedPublisher(
                user_name=contributor.user_name,
                score=breakdown.score,
                reason=reason,
                contributor=contributor,
            )
            profile = profiles.get(contributor.user_name)
            if profile is not None:
                self._attach_profile(publisher, profile)
            publishers.append(publisher)

        publishers.extend(self._merge_trusted(publishers, trusted))

        for publisher in publishers:
            self._apply_trust_bonus(publisher)

        logger.info(
            f"Selected {len(publishers)} verified publishers "
            f"({len(excluded)} excluded, {len(contributors)} contributors)"
        )

        return SelectionResult(
            publishers=publishers,
            excluded=excluded,
            contribution_scores={c.user_name: b for c, b in scored},
            selected_at=self.contribution_scorer.clock(),
            audit=audit,
        )

    def _score_contributors(
        self, contributors: Sequence[Contributor], audit: AuditLog
    ) -> list[tuple[Contributor, ContributionScore]]:
        """Score each contributor, isolating failures per record."""
        scored = []
        seen: set[str] = set()

        for contributor in contributors:
            if contributor.user_name in seen:
                audit.record(
                    contributor.user_name,
                    AuditKind.DUPLICATE,
                    "Duplicate user name, keeping first record",
                )
                continue
            seen.add(contributor.user_name)

            try:
                breakdown = self.contribution_scorer.score_breakdown(contributor)
            except InvalidRecordError as e:
                if self.strict:
                    raise
                audit.record(contributor.user_name, AuditKind.INVALID, str(e))
                continue

            if breakdown.is_automation:
                audit.record(
                    contributor.user_name,
                    AuditKind.AUTOMATION,
                    "Automation account",
                    score=breakdown.score,
                )
            elif breakdown.abuse_penalty is not None:
                loc_per_commit = (
                    contributor.lines_added + contributor.lines_removed
                ) / contributor.commit_count
                audit.record(
                    contributor.user_name,
                    AuditKind.ABUSE_PENALTY,
                    f"{contributor.commit_count} commits at {loc_per_commit:.2f} "
                    f"lines/commit, penalty factor {breakdown.abuse_penalty:.2f}",
                    score=breakdown.score,
                )

            scored.append((contributor, breakdown))

        return scored

    def _merge_trusted(
        self,
        admitted: list[VerifiedPublisher],
        trusted: Sequence[VerifiedPublisher],
    ) -> list[VerifiedPublisher]:
        """Copy allow-listed publishers that were not admitted algorithmically."""
        seen = {p.user_name for p in admitted}
        merged = []

        for entry in trusted:
            if entry.user_name in seen:
                continue
            seen.add(entry.user_name)

            # Deep copy so the allow-list keeps its baseline score across runs
            publisher = entry.model_copy(deep=True)
            publisher.reason = AdmissionReason.MANUALLY_TRUSTED
            merged.append(publisher)

        return merged

    def _attach_profile(self, publisher: VerifiedPublisher, profile: VerifiedPublisher) -> None:
        profile = profile.model_copy(deep=True)
        publisher.plugin_listings = profile.plugin_listings
        publisher.reviews = profile.reviews
        publisher.reports = profile.reports

    def _apply_trust_bonus(self, publisher: VerifiedPublisher) -> None:
        bonus = self.trust_scorer.calculate_bonus(publisher)
        publisher.base_score = publisher.score
        publisher.trust_bonus = bonus
        publisher.score += bonus


def select_verified_publishers(
    contributors: Sequence[Contributor],
    trusted_publishers: Iterable[VerifiedPublisher] = (),
    settings: Settings | None = None,
) -> list[VerifiedPublisher]:
    """Select verified publishers with default scorers.

    Returns:
        Admitted publishers with final scores, in admission order.
    """
    selector = PublisherSelector(settings=settings, trusted_publishers=trusted_publishers)
    return selector.select(contributors).publishers
