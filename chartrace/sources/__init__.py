"""Row sources: where raw chart rows come from."""

from chartrace.sources.base import BaseRowSource, SourceError
from chartrace.sources.csv_source import CsvRowSource

__all__ = ["BaseRowSource", "CsvRowSource", "SourceError"]
