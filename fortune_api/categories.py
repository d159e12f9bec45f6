from __future__ import annotations

import logging
import os
from typing import Iterator

logger = logging.getLogger(__name__)


class CategoryIndexError(Exception):
    """The fortune directory could not be listed."""


def load_categories(directory: str) -> frozenset[str]:
    """Return the names in ``directory`` that contain no dot.

    Files such as ``wisdom.dat`` or ``README.md`` are index or support
    files, not categories.
    """
    try:
        entries = os.listdir(directory)
    except OSError as exc:
        raise CategoryIndexError(f"Failed to read fortune files from {directory}: {exc}") from exc
    return frozenset(name for name in entries if "." not in name)


class CategoryIndex:
    """Immutable set of category names, built once at startup."""

    def __init__(self, names: frozenset[str]) -> None:
        self._names = frozenset(names)

    @classmethod
    def from_directory(cls, directory: str) -> "CategoryIndex":
        index = cls(load_categories(directory))
        logger.info("Loaded %d fortune categories from %s", len(index), directory)
        return index

    @property
    def names(self) -> frozenset[str]:
        return self._names

    def as_mapping(self) -> dict[str, str]:
        return {name: "" for name in sorted(self._names)}

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)
