"""In-memory state slot for the published cart."""
from typing import Any, Optional


class InMemoryCartStorage:
    """
    Holds the current cart as one plain dict.

    Publishing replaces the whole dict in a single assignment, so a reader
    never sees items from one mutation next to totals from another.
    Nothing here validates the shape; the store normalizes on read.
    """

    def __init__(self, initial: Any = None):
        self._data: Any = initial

    def load(self) -> Optional[Any]:
        """Return the raw stored state (None if nothing was published)."""
        return self._data

    def save(self, data: dict) -> None:
        self._data = data

    def delete(self) -> None:
        self._data = None


__all__ = ["InMemoryCartStorage"]
