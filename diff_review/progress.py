"""Progress calculation over the change registry."""

from __future__ import annotations

from dataclasses import dataclass

from .registry import ChangeRegistry


@dataclass(frozen=True)
class Progress:
    total: int
    applied: int
    percentage: float

    @property
    def text(self) -> str:
        return f"{self.applied} of {self.total} changes applied"


def compute_progress(registry: ChangeRegistry) -> Progress:
    total = sum(len(f.changes) for f in registry.files)
    applied = len(registry.applied_ids)
    percentage = (applied / total) * 100 if total > 0 else 0.0
    return Progress(total=total, applied=applied, percentage=percentage)
