"""Abstract base class for record sources."""

from abc import ABC, abstractmethod

from pubtrust.models.schemas import Contributor, VerifiedPublisher


class BaseSource(ABC):
    """Base class for contributor and publisher record sources.

    Each source normalizes data from an exporter format into the common
    schema consumed by the selector.
    """

    @abstractmethod
    def load_contributors(self) -> list[Contributor]:
        """Return contributor records, in the order the exporter produced them.

        Raises:
            RecordLoadError: If the source cannot be read or parsed.
        """
        ...

    def load_publishers(self) -> list[VerifiedPublisher]:
        """Return manually trusted publisher records.

        Sources without an allow-list return an empty list.
        """
        return []

    def load_profiles(self) -> dict[str, VerifiedPublisher]:
        """Return platform profiles for ranked contributors, keyed by user name."""
        return {}


class RecordLoadError(Exception):
    """Raised when records cannot be loaded from a source."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load records from {source}: {reason}")
