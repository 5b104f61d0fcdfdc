"""
Change registry: the single piece of mutable review state.

Keeps each change's ``applied`` flag and the aggregate applied set in step:
every mutation goes through :meth:`ChangeRegistry.set_applied`, which
updates both before returning.
"""

from __future__ import annotations

import logging
from typing import Iterator

from .errors import ReviewError
from .models import (
    Change, FileDiff, Session, STATUS_CANCELLED, STATUS_COMPLETED,
)

logger = logging.getLogger(__name__)


class RegistryFrozenError(ReviewError):
    """Raised on mutation after the session was finalized."""


class ChangeRegistry:
    """In-memory view of a loaded session."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self._by_id: dict[str, Change] = {}
        for file_diff in session.files:
            for change in file_diff.changes:
                self._by_id[change.id] = change

        if session.applied_changes is not None:
            self._reconcile(session.applied_changes)
        self._applied: set[str] = {
            cid for cid, c in self._by_id.items() if c.applied
        }

    def _reconcile(self, applied_ids: list[str]) -> None:
        """Make per-change flags agree with the snapshot's applied list."""
        wanted = set(applied_ids)
        unknown = wanted - self._by_id.keys()
        if unknown:
            logger.warning(
                f"Ignoring unknown applied change ids in snapshot: {sorted(unknown)}")
        for cid, change in self._by_id.items():
            flag = cid in wanted
            if change.applied != flag:
                logger.debug(f"Reconciled change {cid}: applied={flag}")
                change.applied = flag

    # ── Queries ──

    @property
    def files(self) -> list[FileDiff]:
        return self.session.files

    @property
    def applied_ids(self) -> frozenset[str]:
        return frozenset(self._applied)

    @property
    def frozen(self) -> bool:
        return self.session.is_finalized

    def __contains__(self, change_id: str) -> bool:
        return change_id in self._by_id

    def get(self, change_id: str) -> Change:
        return self._by_id[change_id]

    def iter_changes(self) -> Iterator[Change]:
        """All changes in file order, then in-file order."""
        for file_diff in self.session.files:
            yield from file_diff.changes

    def total_changes(self) -> int:
        return len(self._by_id)

    def is_consistent(self) -> bool:
        return self._applied == {
            cid for cid, c in self._by_id.items() if c.applied
        }

    # ── Mutation ──

    def set_applied(self, change_id: str, applied: bool) -> None:
        if self.frozen:
            raise RegistryFrozenError(
                f"Session {self.session.id} is {self.session.status}")
        change = self._by_id[change_id]
        change.applied = applied
        if applied:
            self._applied.add(change_id)
        else:
            self._applied.discard(change_id)

    def finalize(self, status: str = STATUS_COMPLETED) -> None:
        if status not in (STATUS_COMPLETED, STATUS_CANCELLED):
            raise ValueError(f"Not a final status: {status}")
        self.session.status = status
