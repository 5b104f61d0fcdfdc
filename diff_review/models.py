"""
Review session data model: sessions, per-file diffs and individual changes
as delivered by the authority's session snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .errors import ValidationGap

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"

_CHANGE_LABELS = {
    "replace": "MODIFY",
    "insert_after": "INSERT",
    "insert_before": "INSERT",
    "delete": "DELETE",
    "create_file": "CREATE",
    "delete_file": "DELETE",
    "replace_range": "MODIFY",
    "insert_many_after": "INSERT",
    "insert_many_before": "INSERT",
    "delete_many": "DELETE",
}


def format_change_type(change_type: str) -> str:
    """Display label for a change type; unknown types show upper-cased."""
    return _CHANGE_LABELS.get(change_type, change_type.upper())


def _require(data: dict, key: str, what: str) -> Any:
    if key not in data or data[key] is None:
        raise ValidationGap(f"{what} is missing required field '{key}'")
    return data[key]


@dataclass
class Change:
    """One atomic proposed edit, keyed by a session-unique id."""
    id: str
    change_type: str
    line_number: int = 0
    old_content: Optional[str] = None
    new_content: Optional[str] = None
    reason: str = ""
    applied: bool = False

    @property
    def label(self) -> str:
        return format_change_type(self.change_type)

    @property
    def body_kind(self) -> str | None:
        """``modify``, ``insert``, ``delete`` or None when there is no body."""
        if self.old_content and self.new_content:
            return "modify"
        if self.new_content:
            return "insert"
        if self.old_content:
            return "delete"
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "Change":
        if not isinstance(data, dict):
            raise ValidationGap(f"change entry is not an object: {data!r}")
        change_id = _require(data, "id", "change")
        line_number = data.get("line_number", 0)
        if not isinstance(line_number, int):
            raise ValidationGap(
                f"change {change_id} has non-integer line_number {line_number!r}")
        return cls(
            id=str(change_id),
            change_type=str(_require(data, "change_type", f"change {change_id}")),
            line_number=line_number,
            old_content=data.get("old_content"),
            new_content=data.get("new_content"),
            reason=data.get("reason") or "",
            applied=bool(data.get("applied", False)),
        )


@dataclass
class FileDiff:
    """Proposed changes for one file plus its before/after text."""
    file_path: str
    file_type: str = "text"
    original_content: str = ""
    preview_content: str = ""
    changes: list[Change] = field(default_factory=list)

    @property
    def line_counts(self) -> tuple[int, int]:
        return (len(self.original_content.split("\n")),
                len(self.preview_content.split("\n")))

    @classmethod
    def from_dict(cls, data: dict) -> "FileDiff":
        if not isinstance(data, dict):
            raise ValidationGap(f"file entry is not an object: {data!r}")
        path = _require(data, "file_path", "file")
        changes = data.get("changes", [])
        if not isinstance(changes, list):
            raise ValidationGap(f"file {path} has non-list 'changes'")
        return cls(
            file_path=str(path),
            file_type=data.get("file_type") or "text",
            original_content=data.get("original_content") or "",
            preview_content=data.get("preview_content") or "",
            changes=[Change.from_dict(c) for c in changes],
        )


@dataclass
class Session:
    """A review unit: a fixed, ordered set of files and their changes."""
    id: str
    repository_name: str = ""
    repository_path: str = ""
    status: str = STATUS_ACTIVE
    files: list[FileDiff] = field(default_factory=list)
    applied_changes: Optional[list[str]] = None

    @property
    def is_finalized(self) -> bool:
        return self.status != STATUS_ACTIVE

    @classmethod
    def from_dict(cls, session_id: str, data: dict) -> "Session":
        """Build a session from a snapshot; raises ValidationGap on bad shape."""
        if not isinstance(data, dict):
            raise ValidationGap("session snapshot is not an object")
        files = data.get("files", [])
        if not isinstance(files, list):
            raise ValidationGap("session snapshot has non-list 'files'")
        applied = data.get("applied_changes")
        if applied is not None and not isinstance(applied, list):
            raise ValidationGap("session snapshot has non-list 'applied_changes'")

        session = cls(
            id=str(data.get("id") or session_id),
            repository_name=data.get("repository_name") or "",
            repository_path=data.get("repository_path") or "",
            status=str(data.get("status") or STATUS_ACTIVE).lower(),
            files=[FileDiff.from_dict(f) for f in files],
            applied_changes=[str(a) for a in applied] if applied is not None else None,
        )

        seen: set[str] = set()
        for f in session.files:
            for c in f.changes:
                if c.id in seen:
                    raise ValidationGap(f"duplicate change id {c.id}")
                seen.add(c.id)
        return session
