"""
Holiday providers feeding the business-day resolver.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Protocol

import yaml
from pendulum import DateTime

from ..domain.calendar import resolve_instant
from ..domain.exceptions import MalformedInputError

logger = logging.getLogger(__name__)


class HolidayProviderProtocol(Protocol):
    """Protocol describing the holiday source behaviour needed by the engine."""

    def get_holidays(self) -> List[DateTime]:
        """Return holiday dates."""


def _resolve_holidays(values: Iterable[Any], source: str) -> List[DateTime]:
    holidays: List[DateTime] = []

    for value in values:
        try:
            holidays.append(resolve_instant(value))
        except MalformedInputError as exc:
            logger.warning("Skipping holiday entry %r from %s: %s", value, source, exc)

    return holidays


class StaticHolidayProvider:
    """Holidays supplied in code."""

    def __init__(self, holidays: Iterable[Any] = ()):
        self._holidays = _resolve_holidays(holidays, source="static list")

    def get_holidays(self) -> List[DateTime]:
        return list(self._holidays)


class FileHolidayProvider:
    """
    Loads holidays from a JSON or YAML file.

    The file holds either a list of dates or a mapping with a ``holidays``
    list:

        holidays:
          - 2025-12-25
          - 2025-12-26
    """

    def __init__(self, path: Path):
        """
        Initialize the provider.

        Args:
            path: JSON (``.json``) or YAML file with holiday dates

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file cannot be decoded or has the wrong shape
        """
        self.path = path
        self._holidays = self._load_holidays()

    def _load_holidays(self) -> List[DateTime]:
        """Load holiday data from the file."""
        if not self.path.exists():
            raise FileNotFoundError(f"Holiday file not found: {self.path}")

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                if self.path.suffix.lower() == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as exc:
                raise ValueError(f"Invalid holiday file {self.path}: {exc}") from exc

        if isinstance(data, dict):
            data = data.get("holidays", [])
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ValueError(f"Holiday file {self.path} must contain a list of dates.")

        # YAML turns unquoted dates into datetime.date, JSON keeps strings
        return _resolve_holidays(data, source=str(self.path))

    def get_holidays(self) -> List[DateTime]:
        return list(self._holidays)
