"""Scorers and selection for verified publishers."""

from pubtrust.analyzers.contribution import ContributionScorer, is_automation_account
from pubtrust.analyzers.selector import PublisherSelector, select_verified_publishers
from pubtrust.analyzers.trust import PlatformTrustScorer, TrustSignals

__all__ = [
    "ContributionScorer",
    "PlatformTrustScorer",
    "PublisherSelector",
    "TrustSignals",
    "is_automation_account",
    "select_verified_publishers",
]
