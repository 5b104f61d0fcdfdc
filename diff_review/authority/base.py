from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..errors import ValidationGap


@dataclass
class ActionResponse:
    """Outcome reported by the authority for a mutating request."""
    success: bool
    error: Optional[str] = None
    applied_changes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict, require_applied: bool = False) -> "ActionResponse":
        """Interpret ``{success, error?, applied_changes?}`` payloads.

        A bare ``{error}`` body counts as a failure. Anything without a
        boolean ``success`` and without ``error`` raises ValidationGap, as
        does a successful reply missing ``applied_changes`` when
        ``require_applied`` is set (completion replies always carry it).
        """
        if not isinstance(data, dict):
            raise ValidationGap(f"response is not an object: {data!r}")
        success = data.get("success")
        error = data.get("error")
        if not isinstance(success, bool):
            if error is None:
                raise ValidationGap("response has neither 'success' nor 'error'")
            success = False
        if success and error is not None:
            success = False
        if success and require_applied and data.get("applied_changes") is None:
            raise ValidationGap("response is missing required field 'applied_changes'")
        applied = data.get("applied_changes") or []
        if not isinstance(applied, list):
            raise ValidationGap("response has non-list 'applied_changes'")
        return cls(
            success=success,
            error=str(error) if error is not None else None,
            applied_changes=[str(a) for a in applied],
        )


class Authority(ABC):
    """The remote system of record for a review session.

    Implementations raise :class:`~diff_review.errors.AuthorityError` on
    transport failure and return raw payload dicts otherwise.
    """

    @abstractmethod
    async def load_session(self, session_id: str) -> dict:
        """Fetch the session snapshot."""

    @abstractmethod
    async def apply_change(self, session_id: str, change_id: str) -> dict:
        """Commit one change."""

    @abstractmethod
    async def unapply_change(self, session_id: str, change_id: str) -> dict:
        """Revert one change."""

    @abstractmethod
    async def complete_session(self, session_id: str) -> dict:
        """Finalize the session."""

    @abstractmethod
    async def cancel_session(self, session_id: str) -> dict:
        """Abandon the session."""
