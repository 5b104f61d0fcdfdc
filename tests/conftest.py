"""Shared fixtures: an in-memory authority that records every request."""

from __future__ import annotations

import asyncio

import pytest

from diff_review.authority.base import Authority
from diff_review.errors import AuthorityError


def make_change(change_id: str, change_type: str = "replace", applied: bool = False,
                line_number: int = 1) -> dict:
    return {
        "id": change_id,
        "change_type": change_type,
        "line_number": line_number,
        "old_content": "old line",
        "new_content": "new line",
        "applied": applied,
        "reason": f"reason for {change_id}",
    }


def make_snapshot(files: dict[str, list[dict]], applied_changes=None,
                  status: str = "active") -> dict:
    snapshot = {
        "id": "sess-1",
        "repository_name": "demo-repo",
        "repository_path": "/tmp/demo-repo",
        "status": status,
        "files": [
            {
                "file_path": path,
                "file_type": "python",
                "original_content": "a\nb\n",
                "preview_content": "a\nc\n",
                "changes": changes,
            }
            for path, changes in files.items()
        ],
    }
    if applied_changes is not None:
        snapshot["applied_changes"] = applied_changes
    return snapshot


class FakeAuthority(Authority):
    """Scriptable authority.

    ``responses`` maps change id to the payload returned for apply/unapply;
    ids not listed succeed. ``raise_for`` ids raise AuthorityError. ``gate``
    holds apply/unapply replies and ``complete_gate`` holds the complete reply
    until the event is set.
    """

    def __init__(self, snapshot: dict | None = None) -> None:
        self.snapshot = snapshot if snapshot is not None else make_snapshot({})
        self.calls: list[tuple] = []
        self.responses: dict[str, dict] = {}
        self.raise_for: set[str] = set()
        self.complete_response: dict = {"success": True, "applied_changes": []}
        self.cancel_response: dict = {"success": True}
        self.gate: asyncio.Event | None = None
        self.complete_gate: asyncio.Event | None = None

    async def _wait(self) -> None:
        if self.gate is not None:
            await self.gate.wait()

    async def load_session(self, session_id: str) -> dict:
        self.calls.append(("load", session_id))
        if "load" in self.raise_for:
            raise AuthorityError("connection refused")
        return self.snapshot

    async def _change(self, op: str, change_id: str) -> dict:
        self.calls.append((op, change_id))
        await self._wait()
        if change_id in self.raise_for:
            raise AuthorityError("Request timed out")
        return self.responses.get(change_id, {"success": True})

    async def apply_change(self, session_id: str, change_id: str) -> dict:
        return await self._change("apply", change_id)

    async def unapply_change(self, session_id: str, change_id: str) -> dict:
        return await self._change("unapply", change_id)

    async def complete_session(self, session_id: str) -> dict:
        self.calls.append(("complete", session_id))
        if self.complete_gate is not None:
            await self.complete_gate.wait()
        if "complete" in self.raise_for:
            raise AuthorityError("connection reset")
        return self.complete_response

    async def cancel_session(self, session_id: str) -> dict:
        self.calls.append(("cancel", session_id))
        return self.cancel_response


@pytest.fixture
def two_file_snapshot() -> dict:
    return make_snapshot({
        "src/a.py": [make_change("c1")],
        "src/b.py": [make_change("c2", "insert_after")],
    })


@pytest.fixture
def three_change_snapshot() -> dict:
    return make_snapshot({
        "src/a.py": [make_change("c1"), make_change("c2", "delete")],
        "src/b.py": [make_change("c3", "create_file")],
    })
