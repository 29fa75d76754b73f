"""JSON file source for contributor and publisher records."""

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pubtrust.adapters.base import BaseSource, RecordLoadError
from pubtrust.models.schemas import Contributor, VerifiedPublisher

logger = logging.getLogger(__name__)

_contributors = TypeAdapter(list[Contributor])
_publishers = TypeAdapter(list[VerifiedPublisher])


class JsonFileSource(BaseSource):
    """Reads records from a JSON export.

    Accepted layouts:
    - a bare list of records, read as `list_key` (contributors by default)
    - {"contributors": [...], "trusted_publishers": [...],
      "platform_profiles": [...]}, every key optional
    """

    def __init__(self, path: Path, list_key: str = "contributors") -> None:
        self.path = Path(path)
        self.list_key = list_key
        self._data: dict | None = None

    def load_contributors(self) -> list[Contributor]:
        records = self._load().get("contributors", [])
        try:
            contributors = _contributors.validate_python(records)
        except ValidationError as e:
            raise RecordLoadError(str(self.path), f"invalid contributor record: {e}") from e

        logger.debug(f"Loaded {len(contributors)} contributors from {self.path}")
        return contributors

    def load_publishers(self) -> list[VerifiedPublisher]:
        records = self._load().get("trusted_publishers", [])
        try:
            publishers = _publishers.validate_python(records)
        except ValidationError as e:
            raise RecordLoadError(str(self.path), f"invalid publisher record: {e}") from e

        logger.debug(f"Loaded {len(publishers)} trusted publishers from {self.path}")
        return publishers

    def load_profiles(self) -> dict[str, VerifiedPublisher]:
        records = self._load().get("platform_profiles", [])
        try:
            profiles = _publishers.validate_python(records)
        except ValidationError as e:
            raise RecordLoadError(str(self.path), f"invalid platform profile: {e}") from e

        return {p.user_name: p for p in profiles}

    def _load(self) -> dict:
        if self._data is not None:
            return self._data

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise RecordLoadError(str(self.path), "file not found") from e
        except json.JSONDecodeError as e:
            raise RecordLoadError(str(self.path), f"malformed JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise RecordLoadError(str(self.path), f"not UTF-8 text: {e}") from e
        except OSError as e:
            raise RecordLoadError(str(self.path), f"cannot read file: {e.strerror or e}") from e

        if isinstance(data, list):
            data = {self.list_key: data}
        elif not isinstance(data, dict):
            raise RecordLoadError(str(self.path), "expected a JSON object or list")

        self._data = data
        return data
