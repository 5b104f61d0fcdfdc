"""Tests for the confirmation gate."""

import pytest

from diff_review.confirmation import ConfirmationGate


@pytest.mark.asyncio
async def test_confirm_runs_and_clears():
    calls = []
    gate = ConfirmationGate()
    gate.request_confirmation("Title", "Message", lambda: calls.append("x"))
    assert gate.pending.title == "Title"
    await gate.confirm()
    assert calls == ["x"]
    assert gate.pending is None
    await gate.confirm()
    assert calls == ["x"]


@pytest.mark.asyncio
async def test_confirm_awaits_coroutine_actions():
    async def action():
        return 42

    gate = ConfirmationGate()
    gate.request_confirmation("t", "m", action)
    assert await gate.confirm() == 42


@pytest.mark.asyncio
async def test_new_request_replaces_pending():
    calls = []
    gate = ConfirmationGate()
    gate.request_confirmation("first", "m", lambda: calls.append("first"))
    gate.request_confirmation("second", "m", lambda: calls.append("second"))
    await gate.confirm()
    assert calls == ["second"]


def test_cancel_discards_without_running():
    calls = []
    gate = ConfirmationGate()
    gate.request_confirmation("t", "m", lambda: calls.append("x"))
    gate.cancel()
    assert gate.pending is None
    assert calls == []
