"""Record sources feeding the selector."""

from pubtrust.adapters.base import BaseSource, RecordLoadError
from pubtrust.adapters.json_file import JsonFileSource

__all__ = ["BaseSource", "JsonFileSource", "RecordLoadError"]
