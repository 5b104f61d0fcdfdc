"""File focus tracking for the review surface."""

from __future__ import annotations


class Navigator:
    """Tracks which file is focused. Never touches change state."""

    def __init__(self, file_count: int = 0) -> None:
        self._count = file_count
        self._index = 0

    @property
    def current_index(self) -> int | None:
        return self._index if self._count > 0 else None

    @property
    def has_previous(self) -> bool:
        return self._count > 0 and self._index > 0

    @property
    def has_next(self) -> bool:
        return self._count > 0 and self._index < self._count - 1

    def navigate(self, direction: int) -> bool:
        """Move focus by -1 or +1. Out-of-range moves are ignored.

        Returns True if the focus changed.
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction}")
        new_index = self._index + direction
        if 0 <= new_index < self._count:
            self._index = new_index
            return True
        return False

    def select(self, index: int) -> bool:
        """Focus a file picked from the tab list.

        Indexes outside the file list are ignored. Returns True if the
        focus changed.
        """
        if not 0 <= index < self._count or index == self._index:
            return False
        self._index = index
        return True
