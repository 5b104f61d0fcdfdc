"""
Review controller. Loads a session, applies and unapplies changes through
the authority, and finalizes the session exactly once.

The controller owns all review state (registry, navigation focus,
confirmation gate) and never renders. Presentation layers feed it command
values via :meth:`ReviewController.dispatch` and re-read state when a
notification listener fires.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from . import commands as cmd
from .authority.base import ActionResponse, Authority
from .confirmation import ConfirmationGate
from .errors import ActionError, AuthorityError, LoadError, ValidationGap
from .models import FileDiff, Session, STATUS_CANCELLED, STATUS_COMPLETED
from .navigation import Navigator
from .progress import Progress, compute_progress
from .registry import ChangeRegistry

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    success: bool
    error: Optional[str] = None
    applied_changes: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, error: str) -> "Outcome":
        return cls(success=False, error=error)


@dataclass
class BulkResult:
    attempted: list[str] = field(default_factory=list)
    succeeded: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Notification:
    level: str  # error / success / info
    message: str


class ReviewController:
    """Stateful protocol for one review session."""

    def __init__(self, authority: Authority, session_id: str) -> None:
        self.authority = authority
        self.session_id = session_id
        self.registry: Optional[ChangeRegistry] = None
        self.navigator = Navigator()
        self.gate = ConfirmationGate()
        self.load_error: Optional[LoadError] = None
        self.notifications: list[Notification] = []
        self._listeners: list[Callable[[Notification], None]] = []
        self._in_flight: set[str] = set()
        self._finalizing = False

    # ── State accessors ──

    @property
    def session(self) -> Optional[Session]:
        return self.registry.session if self.registry else None

    @property
    def loaded(self) -> bool:
        return self.registry is not None

    @property
    def finalized(self) -> bool:
        return self.registry is not None and self.registry.frozen

    @property
    def current_file(self) -> Optional[FileDiff]:
        index = self.navigator.current_index
        if self.registry is None or index is None:
            return None
        return self.registry.files[index]

    def progress(self) -> Progress:
        if self.registry is None:
            return Progress(total=0, applied=0, percentage=0.0)
        return compute_progress(self.registry)

    def is_pending(self, change_id: str) -> bool:
        return change_id in self._in_flight

    # ── Notifications ──

    def add_listener(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    def _notify(self, level: str, message: str) -> None:
        note = Notification(level, message)
        self.notifications.append(note)
        for listener in self._listeners:
            listener(note)

    def _fail(self, message: str) -> Outcome:
        logger.warning(f"[Review] {message}")
        self._notify("error", message)
        return Outcome.failed(message)

    # ── Session loading ──

    async def load(self) -> Session:
        """Fetch the snapshot and build the registry in one step.

        Raises LoadError; the error is also kept on ``load_error`` so a UI
        can show a blocking error state instead of a partial session.
        A session is loaded once; calling this again raises LoadError and
        leaves the existing registry in place.
        """
        if self.registry is not None:
            logger.warning(f"[Review] Session {self.session_id} is already loaded")
            raise LoadError("Session already loaded")
        try:
            data = await self.authority.load_session(self.session_id)
            if isinstance(data, dict) and data.get("error"):
                raise LoadError(str(data["error"]))
            session = Session.from_dict(self.session_id, data)
        except LoadError as e:
            self.load_error = e
            logger.error(f"[Review] Failed to load session {self.session_id}: {e}")
            raise
        except (AuthorityError, ValidationGap) as e:
            self.load_error = LoadError(str(e))
            logger.error(f"[Review] Failed to load session {self.session_id}: {e}")
            raise self.load_error from e

        self.registry = ChangeRegistry(session)
        self.navigator = Navigator(len(session.files))
        logger.info(
            f"[Review] Session {session.id} loaded: {len(session.files)} files, "
            f"{self.registry.total_changes()} changes, status={session.status}")
        return session

    # ── Change application ──

    def _precheck(self, change_id: str) -> Optional[str]:
        if self.registry is None:
            return "Session is not loaded"
        if self.registry.frozen:
            return f"Session is {self.registry.session.status}; changes are locked"
        if change_id not in self.registry:
            return f"Unknown change: {change_id}"
        if change_id in self._in_flight:
            return f"A request for change {change_id} is already in progress"
        return None

    async def _request(self, call, *args,
                       require_applied: bool = False) -> ActionResponse:
        try:
            return ActionResponse.from_dict(await call(self.session_id, *args),
                                            require_applied=require_applied)
        except AuthorityError as e:
            raise ActionError(str(e)) from e

    async def _set_change(self, change_id: str, applied: bool) -> Outcome:
        verb = "apply" if applied else "unapply"
        problem = self._precheck(change_id)
        if problem:
            return self._fail(problem)

        call = (self.authority.apply_change if applied
                else self.authority.unapply_change)
        self._in_flight.add(change_id)
        try:
            response = await self._request(call, change_id)
        except ActionError as e:
            return self._fail(f"Failed to {verb} change: {e}")
        finally:
            self._in_flight.discard(change_id)

        if not response.success:
            return self._fail(response.error or f"Failed to {verb} change")

        # The session may have been finalized while the request was out
        if self.registry.frozen:
            return self._fail(
                f"Ignored {verb} of change {change_id}: session is "
                f"{self.registry.session.status}")
        self.registry.set_applied(change_id, applied)
        state = "applied" if applied else "unapplied"
        logger.info(f"[Review] Change {state}: {change_id}")
        return Outcome(success=True)

    async def apply_change(self, change_id: str) -> Outcome:
        return await self._set_change(change_id, True)

    async def unapply_change(self, change_id: str) -> Outcome:
        return await self._set_change(change_id, False)

    async def apply_all_changes(self) -> BulkResult:
        """Apply every unapplied change, one request at a time."""
        result = BulkResult()
        if self.registry is None:
            self._fail("Session is not loaded")
            return result

        pending = [c.id for c in self.registry.iter_changes() if not c.applied]
        logger.info(f"[Review] Applying {len(pending)} changes")
        for change_id in pending:
            result.attempted.append(change_id)
            outcome = await self.apply_change(change_id)
            (result.succeeded if outcome.success else result.failed).append(change_id)
        logger.info(
            f"[Review] Bulk apply done: {len(result.succeeded)} ok, "
            f"{len(result.failed)} failed")
        return result

    def show_selection(self) -> None:
        count = len(self.registry.applied_ids) if self.registry else 0
        self._notify("info",
                     f"{count} changes are currently selected for application")

    # ── Finalization ──

    def _finalize_precheck(self) -> Optional[str]:
        if self.registry is None:
            return "Session is not loaded"
        if self.registry.frozen:
            return f"Session is already {self.registry.session.status}"
        if self._finalizing:
            return "Session completion already in progress"
        return None

    async def _finalize_request(self, call, verb: str,
                                require_applied: bool = False) -> ActionResponse | Outcome:
        """Send one finalize request. A failed Outcome means nothing changed."""
        problem = self._finalize_precheck()
        if problem:
            return self._fail(problem)
        self._finalizing = True
        try:
            response = await self._request(call, require_applied=require_applied)
        except ActionError as e:
            return self._fail(f"Failed to {verb} session: {e}")
        finally:
            self._finalizing = False
        if not response.success:
            return self._fail(response.error or f"Failed to {verb} session")
        return response

    async def complete_session(self) -> Outcome:
        response = await self._finalize_request(
            self.authority.complete_session, "complete", require_applied=True)
        if isinstance(response, Outcome):
            return response

        self.registry.finalize(STATUS_COMPLETED)
        logger.info(
            f"[Review] Session {self.session_id} completed; authority will apply "
            f"{len(response.applied_changes)} changes")
        self._notify(
            "success",
            f"Session completed! {len(response.applied_changes)} changes will be applied.")
        return Outcome(success=True, applied_changes=response.applied_changes)

    async def cancel_session(self) -> Outcome:
        response = await self._finalize_request(
            self.authority.cancel_session, "cancel")
        if isinstance(response, Outcome):
            return response

        self.registry.finalize(STATUS_CANCELLED)
        logger.info(f"[Review] Session {self.session_id} cancelled")
        self._notify("success", "Session cancelled. No changes will be applied.")
        return Outcome(success=True)

    # ── Command dispatch ──

    async def dispatch(self, command: cmd.Command):
        """Route one user command. Returns whatever the handler returns."""
        if isinstance(command, cmd.NavigateFile):
            return self.navigator.navigate(command.direction)
        if isinstance(command, cmd.SelectFile):
            return self.navigator.select(command.index)
        if isinstance(command, cmd.ApplyChange):
            return await self.apply_change(command.change_id)
        if isinstance(command, cmd.UnapplyChange):
            return await self.unapply_change(command.change_id)
        if isinstance(command, cmd.RequestApplyAll):
            self.gate.request_confirmation(
                "Apply All Changes",
                "Are you sure you want to apply all changes in this session?",
                self.apply_all_changes)
        elif isinstance(command, cmd.RequestSkipAll):
            self.gate.request_confirmation(
                "Skip All Changes",
                "Are you sure you want to skip all changes? This will "
                "complete the session without applying any changes.",
                self.complete_session)
        elif isinstance(command, cmd.RequestComplete):
            self.gate.request_confirmation(
                "Complete Review",
                "Complete the review session and apply selected changes?",
                self.complete_session)
        elif isinstance(command, cmd.ConfirmPending):
            return await self.gate.confirm()
        elif isinstance(command, cmd.CancelPending):
            self.gate.cancel()
        elif isinstance(command, cmd.CancelSession):
            return await self.cancel_session()
        elif isinstance(command, cmd.ShowSelection):
            self.show_selection()
        else:
            raise TypeError(f"Unknown command: {command!r}")
        return None
