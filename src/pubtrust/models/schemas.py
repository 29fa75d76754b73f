"""Pydantic models for contributor and publisher data."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from pubtrust.monitoring.audit import AuditLog


class ReportOutcome(str, Enum):
    """Moderation outcome of a report filed against a publisher."""

    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"
    REJECTED = "rejected"


class AdmissionReason(str, Enum):
    """How a publisher made it onto the verified list."""

    TOP_N = "Top N"
    ABOVE_THRESHOLD = "Above threshold"
    MANUALLY_TRUSTED = "Manually trusted"


# --- Contribution Models ---


class Contributor(BaseModel):
    """A code contributor and their raw activity metrics."""

    user_name: str
    commit_count: int = 0
    lines_added: int = 0
    lines_removed: int = 0
    first_contribution_date: datetime
    last_contribution_date: datetime | None = None  # None = never recorded


class ContributionScore(BaseModel):
    """Breakdown of a contributor's code contribution score."""

    user_name: str
    score: float
    is_automation: bool = False
    base_score: float = 0.0
    recency_factor: float = 0.0
    longevity_factor: float = 0.0
    months_since_last_contribution: float = 0.0
    active_months: float = 0.0
    abuse_penalty: float | None = None  # Multiplier, None if not applied
    raw_score: float = 0.0  # Before overflow compression

    @property
    def overflow_compressed(self) -> bool:
        return self.score != self.raw_score


# --- Platform Models ---


class Review(BaseModel):
    """A star review left by another user."""

    reviewer: str
    date: datetime
    stars: int = Field(ge=1, le=5)
    comment: str | None = None

    @property
    def is_positive(self) -> bool:
        return self.stars >= 4


class Report(BaseModel):
    """A moderation report filed against a publisher."""

    reporter: str
    date: datetime
    details: str = ""
    outcome: ReportOutcome = ReportOutcome.PENDING
    moderator_comment: str | None = None

    @property
    def resolved(self) -> bool:
        """Whether moderation upheld the report."""
        return self.outcome == ReportOutcome.VALID


class PluginListing(BaseModel):
    """A plugin published on the platform."""

    id: str
    name: str
    is_public: bool = True
    upload_date: datetime
    downloads: int = Field(default=0, ge=0)
    reviews: list[Review] = Field(default_factory=list)


class VerifiedPublisher(BaseModel):
    """A publisher admitted to the verified list, with its platform profile."""

    user_name: str
    score: float = 0.0
    reason: AdmissionReason = AdmissionReason.MANUALLY_TRUSTED
    contributor: Contributor | None = None
    plugin_listings: list[PluginListing] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    reports: list[Report] = Field(default_factory=list)

    # Filled in by the selector
    base_score: float | None = None
    trust_bonus: float | None = None


# --- Selection Output ---


class SelectionResult(BaseModel):
    """Output of a verified publisher selection run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    publishers: list[VerifiedPublisher] = Field(default_factory=list)
    excluded: list[str] = Field(default_factory=list)
    contribution_scores: dict[str, ContributionScore] = Field(default_factory=dict)
    selected_at: datetime | None = None
    audit: AuditLog = Field(default_factory=AuditLog, exclude=True, repr=False)  # Events from this run

    def leaderboard(self) -> list[VerifiedPublisher]:
        """Publishers sorted by final score, highest first."""
        return sorted(self.publishers, key=lambda p: p.score, reverse=True)

    def get(self, user_name: str) -> VerifiedPublisher | None:
        for publisher in self.publishers:
            if publisher.user_name == user_name:
                return publisher
        return None


class InvalidRecordError(Exception):
    """Raised when a contributor record violates its invariants."""

    def __init__(self, user_name: str, field: str, value: object) -> None:
        self.user_name = user_name
        self.field = field
        self.value = value
        super().__init__(f"Contributor '{user_name}' has invalid {field}: {value!r}")
