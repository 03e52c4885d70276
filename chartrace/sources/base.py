"""Base row source interface."""

import abc
from pathlib import Path

from chartrace.models import RawRow


class SourceError(ValueError):
    """The source could not be read as a chart dataset."""


class BaseRowSource(abc.ABC):
    """Base class for all chart row sources."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @abc.abstractmethod
    def read(self) -> list[RawRow]:
        """Read every row from the source.

        Returns:
            Raw rows in source order. Nothing is validated beyond the
            presence of the required columns.
        """
        ...

    @property
    def source_name(self) -> str:
        return self.path.name
