"""Data models and schemas."""

from pubtrust.models.schemas import (
    AdmissionReason,
    ContributionScore,
    Contributor,
    InvalidRecordError,
    PluginListing,
    Report,
    ReportOutcome,
    Review,
    SelectionResult,
    VerifiedPublisher,
)

__all__ = [
    "AdmissionReason",
    "ContributionScore",
    "Contributor",
    "InvalidRecordError",
    "PluginListing",
    "Report",
    "ReportOutcome",
    "Review",
    "SelectionResult",
    "VerifiedPublisher",
]
