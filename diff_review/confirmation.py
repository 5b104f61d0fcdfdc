"""
Confirmation gate that defers one destructive action until the user confirms.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class PendingAction:
    title: str
    message: str
    action: Callable[[], Any]


class ConfirmationGate:
    """Holds at most one pending action."""

    def __init__(self) -> None:
        self._pending: Optional[PendingAction] = None

    @property
    def pending(self) -> Optional[PendingAction]:
        return self._pending

    def request_confirmation(self, title: str, message: str,
                             action: Callable[[], Any]) -> None:
        # A new request replaces whatever was waiting
        self._pending = PendingAction(title, message, action)

    async def confirm(self) -> Any:
        """Run and clear the pending action. No-op when nothing is pending."""
        pending, self._pending = self._pending, None
        if pending is None:
            return None
        result = pending.action()
        if inspect.isawaitable(result):
            result = await result
        return result

    def cancel(self) -> None:
        self._pending = None
