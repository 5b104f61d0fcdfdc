"""
Textual front end for a review session.

Everything here is presentation: user input becomes command values for
:class:`~diff_review.controller.ReviewController`, and after each command
the view is rebuilt from controller state.
"""

from __future__ import annotations

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Label, ProgressBar, Static

from . import commands as cmd
from .cli_display import log
from .controller import Notification, Outcome, ReviewController
from .errors import LoadError
from .models import Change

_SEVERITY = {
    "error": "error",
    "success": "information",
    "info": "information",
}


def _escape(text: str) -> str:
    """Escape Rich markup characters."""
    return text.replace("[", "\\[")


def format_change_body(change: Change) -> str:
    """Rich markup for a change's -/+ lines; empty when it has no body."""
    kind = change.body_kind
    old = _escape(change.old_content or "")
    new = _escape(change.new_content or "")
    if kind == "modify":
        return f"[red]- {old}[/red]\n[green]+ {new}[/green]"
    if kind == "insert":
        return f"[green]+ {new}[/green]"
    if kind == "delete":
        return f"[red]- {old}[/red]"
    return ""


class ChangeButton(Button):
    """Apply/unapply toggle bound to one change id."""

    def __init__(self, change: Change, disabled: bool = False) -> None:
        if change.applied:
            super().__init__("↶ Unapply", variant="warning",
                             classes="change-btn", disabled=disabled)
        else:
            super().__init__("✓ Apply", variant="success",
                             classes="change-btn", disabled=disabled)
        self.change_id = change.id
        self.applied = change.applied


class FileTab(Button):
    def __init__(self, label: str, index: int, active: bool) -> None:
        super().__init__(label, classes="file-tab active" if active else "file-tab")
        self.index = index


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no dialog for actions held by the confirmation gate."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self._title = title
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="modal"):
            yield Label(self._title, id="modal-title")
            yield Static(self._message, id="modal-message")
            with Horizontal(id="modal-buttons"):
                yield Button("Confirm", id="modal-confirm", variant="primary")
                yield Button("Cancel", id="modal-cancel", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "modal-confirm")


class ReviewApp(App):
    """Interactive per-change review of a session."""

    CSS = """
    Screen {
        background: $surface;
    }
    #title-bar {
        dock: top;
        height: 3;
        background: #1a1a2e;
        color: #e94560;
        text-align: center;
        padding: 1;
        text-style: bold;
    }
    #status-bar {
        height: 1;
        color: #888;
        padding: 0 2;
    }
    #file-tabs {
        height: 3;
        margin: 0 2;
    }
    .file-tab {
        min-width: 10;
        margin: 0 1 0 0;
    }
    .file-tab.active {
        text-style: bold reverse;
    }
    #file-header {
        color: #e9c46a;
        text-style: bold;
        margin: 1 2 0 2;
    }
    #panes {
        height: 1fr;
        margin: 0 2;
    }
    .pane {
        width: 1fr;
        border: round #444;
        padding: 0 1;
    }
    #changes {
        height: 1fr;
        margin: 0 2;
        border: round #444;
        padding: 0 1;
    }
    .change-item {
        height: auto;
        margin: 0 0 1 0;
    }
    .change-item.applied {
        background: #12321f;
    }
    .change-header {
        color: #e9c46a;
    }
    .change-reason {
        color: #6c757d;
    }
    #progress-row {
        height: 1;
        margin: 0 2;
    }
    #action-buttons {
        dock: bottom;
        height: 3;
        align: center middle;
        padding: 0 2;
    }
    #action-buttons Button {
        margin: 0 2;
        min-width: 16;
    }
    #load-error {
        color: #ef4444;
        text-style: bold;
        margin: 2 4;
    }
    #modal {
        width: 60;
        height: auto;
        border: thick #e94560;
        background: #16213e;
        padding: 1 2;
    }
    #modal-title {
        text-style: bold;
    }
    #modal-buttons {
        height: 3;
        align: center middle;
    }
    ConfirmScreen {
        align: center middle;
    }
    """

    BINDINGS = [
        Binding("ctrl+left", "previous_file", "Previous file"),
        Binding("ctrl+right", "next_file", "Next file"),
        Binding("ctrl+enter", "complete", "Complete"),
    ]

    def __init__(self, controller: ReviewController, close_delay: float = 3.0) -> None:
        super().__init__()
        self.controller = controller
        self.close_delay = close_delay
        self.applied_changes: list[str] | None = None
        self._view_lock = asyncio.Lock()
        controller.add_listener(self._on_notification)

    def compose(self) -> ComposeResult:
        yield Static(" ━━  Diff Review  ━━ ", id="title-bar")
        yield Static("Loading session...", id="status-bar")
        yield Horizontal(id="file-tabs")
        yield Static("", id="file-header")
        with Horizontal(id="panes"):
            with VerticalScroll(classes="pane"):
                yield Static("", id="before-content")
            with VerticalScroll(classes="pane"):
                yield Static("", id="after-content")
        yield VerticalScroll(id="changes")
        with Horizontal(id="progress-row"):
            yield ProgressBar(total=100, show_eta=False, id="progress-bar")
            yield Static("", id="progress-text")
        with Horizontal(id="action-buttons"):
            yield Button("Apply All", id="apply-all", variant="success")
            yield Button("Show Selected", id="apply-selected", variant="primary")
            yield Button("Skip All", id="skip-all", variant="warning")
            yield Button("Complete", id="complete", variant="error")
        yield Footer()

    def on_mount(self) -> None:
        self.load_session()

    @work(exclusive=True, group="load")
    async def load_session(self) -> None:
        try:
            await self.controller.load()
        except LoadError as e:
            await self._show_load_error(str(e))
            return
        await self.refresh_view()

    async def _show_load_error(self, message: str) -> None:
        await self.query("#file-tabs, #file-header, #panes, #changes, "
                         "#progress-row, #action-buttons").remove()
        self.query_one("#status-bar", Static).update("")
        await self.mount(Static(f"Failed to load diff session: {_escape(message)}",
                                id="load-error"))

    # ── Rendering ──

    async def refresh_view(self) -> None:
        async with self._view_lock:
            await self._rebuild_view()

    async def _rebuild_view(self) -> None:
        ctl = self.controller
        session = ctl.session
        if session is None:
            return
        locked = ctl.finalized

        self.query_one("#status-bar", Static).update(
            f"Repository: {_escape(session.repository_name)}   "
            f"Session: {session.status}")

        tabs = self.query_one("#file-tabs", Horizontal)
        await tabs.remove_children()
        await tabs.mount_all([
            FileTab(f"{f.file_path} ({len(f.changes)})", i,
                    i == ctl.navigator.current_index)
            for i, f in enumerate(session.files)
        ])

        current = ctl.current_file
        changes = self.query_one("#changes", VerticalScroll)
        await changes.remove_children()
        if current is None:
            self.query_one("#file-header", Static).update("No files to review")
            self.query_one("#before-content", Static).update("")
            self.query_one("#after-content", Static).update("")
            await changes.mount(Static("No files to review"))
        else:
            before, after = current.line_counts
            self.query_one("#file-header", Static).update(
                f"{_escape(current.file_path)}  \\[{current.file_type}]  "
                f"before: {before} lines / after: {after} lines")
            self.query_one("#before-content", Static).update(
                _escape(current.original_content))
            self.query_one("#after-content", Static).update(
                _escape(current.preview_content))
            if not current.changes:
                await changes.mount(Static("No changes in this file"))
            for change in current.changes:
                await changes.mount(self._change_widget(change, locked))

        progress = ctl.progress()
        self.query_one("#progress-bar", ProgressBar).update(progress=progress.percentage)
        self.query_one("#progress-text", Static).update(f"  {progress.text}")

        for button in self.query("#action-buttons Button"):
            button.disabled = locked

    def _change_widget(self, change: Change, locked: bool) -> Vertical:
        classes = "change-item applied" if change.applied else "change-item"
        pending = self.controller.is_pending(change.id)
        parts = [Static(f"{change.label}  Line {change.line_number}",
                        classes="change-header")]
        body = format_change_body(change)
        if body:
            parts.append(Static(body))
        parts.append(Static(f"Reason: {_escape(change.reason)}",
                            classes="change-reason"))
        parts.append(ChangeButton(change, disabled=locked or pending))
        return Vertical(*parts, classes=classes)

    def _on_notification(self, note: Notification) -> None:
        self.notify(note.message, severity=_SEVERITY.get(note.level, "information"))

    # ── Input → commands ──

    @work(group="commands")
    async def run_command(self, command: cmd.Command) -> None:
        result = await self.controller.dispatch(command)
        if self.controller.gate.pending is not None:
            pending = self.controller.gate.pending
            self.push_screen(ConfirmScreen(pending.title, pending.message),
                             self._on_confirm_result)
        await self.refresh_view()
        self._schedule_close(result)

    def _on_confirm_result(self, confirmed: bool | None) -> None:
        if confirmed:
            self.run_command(cmd.ConfirmPending())
        else:
            self.run_command(cmd.CancelPending())

    def _schedule_close(self, result) -> None:
        if not self.controller.finalized or self.applied_changes is not None:
            return
        self.applied_changes = (
            result.applied_changes if isinstance(result, Outcome) else [])
        log.info(f"Session finalized; closing in {self.close_delay}s")
        self.set_timer(self.close_delay, self.exit)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        if isinstance(button, ChangeButton):
            button.disabled = True
            command = (cmd.UnapplyChange(button.change_id) if button.applied
                       else cmd.ApplyChange(button.change_id))
            self.run_command(command)
        elif isinstance(button, FileTab):
            self.run_command(cmd.SelectFile(button.index))
        elif button.id == "apply-all":
            self.run_command(cmd.RequestApplyAll())
        elif button.id == "apply-selected":
            self.run_command(cmd.ShowSelection())
        elif button.id == "skip-all":
            self.run_command(cmd.RequestSkipAll())
        elif button.id == "complete":
            self.run_command(cmd.RequestComplete())

    def action_previous_file(self) -> None:
        self.run_command(cmd.NavigateFile(-1))

    def action_next_file(self) -> None:
        self.run_command(cmd.NavigateFile(1))

    def action_complete(self) -> None:
        if not self.controller.finalized:
            self.run_command(cmd.RequestComplete())
