"""Tests for HttpAuthority. ``requests`` is mocked throughout."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from diff_review.authority.base import ActionResponse
from diff_review.authority.http_client import HttpAuthority
from diff_review.errors import AuthorityError, ValidationGap


def _client(payload=None, exc=None) -> tuple[HttpAuthority, MagicMock]:
    http = MagicMock(spec=requests.Session)
    if exc is not None:
        http.request.side_effect = exc
    else:
        response = MagicMock()
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        http.request.return_value = response
    client = HttpAuthority("http://review.local:8080/", connect_timeout=2,
                           read_timeout=5, session=http)
    return client, http


class TestEndpoints:

    @pytest.mark.asyncio
    async def test_load_session(self):
        client, http = _client({"files": []})
        data = await client.load_session("abc")
        assert data == {"files": []}
        http.request.assert_called_once_with(
            "GET", "http://review.local:8080/api/session/abc",
            json=None, timeout=(2, 5))

    @pytest.mark.asyncio
    async def test_apply_posts_change_id(self):
        client, http = _client({"success": True})
        await client.apply_change("abc", "c1")
        http.request.assert_called_once_with(
            "POST", "http://review.local:8080/api/session/abc/apply",
            json={"change_id": "c1"}, timeout=(2, 5))

    @pytest.mark.asyncio
    async def test_unapply_posts_change_id(self):
        client, http = _client({"success": True})
        await client.unapply_change("abc", "c1")
        args, kwargs = http.request.call_args
        assert args == ("POST", "http://review.local:8080/api/session/abc/unapply")
        assert kwargs["json"] == {"change_id": "c1"}

    @pytest.mark.asyncio
    async def test_complete_and_cancel(self):
        client, http = _client({"success": True, "applied_changes": []})
        await client.complete_session("abc")
        await client.cancel_session("abc")
        urls = [call.args[1] for call in http.request.call_args_list]
        assert urls == ["http://review.local:8080/api/session/abc/complete",
                        "http://review.local:8080/api/session/abc/cancel"]


class TestErrors:

    @pytest.mark.asyncio
    async def test_timeout(self):
        client, _ = _client(exc=requests.exceptions.ReadTimeout("slow"))
        with pytest.raises(AuthorityError, match="timed out"):
            await client.apply_change("abc", "c1")

    @pytest.mark.asyncio
    async def test_connection_error(self):
        client, _ = _client(exc=requests.exceptions.ConnectionError("refused"))
        with pytest.raises(AuthorityError):
            await client.load_session("abc")

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client, http = _client()
        http.request.return_value.json.side_effect = ValueError("no json")
        with pytest.raises(AuthorityError, match="Invalid JSON"):
            await client.load_session("abc")


class TestActionResponse:

    def test_success(self):
        resp = ActionResponse.from_dict({"success": True, "applied_changes": ["a"]})
        assert resp.success and resp.applied_changes == ["a"]

    def test_explicit_failure(self):
        resp = ActionResponse.from_dict({"success": False, "error": "conflict"})
        assert not resp.success and resp.error == "conflict"

    def test_error_only_body(self):
        resp = ActionResponse.from_dict({"error": "Missing change_id"})
        assert not resp.success

    def test_missing_fields(self):
        with pytest.raises(ValidationGap):
            ActionResponse.from_dict({"message": "Change applied"})

    def test_non_object(self):
        with pytest.raises(ValidationGap):
            ActionResponse.from_dict(["ok"])

    def test_applied_list_required_when_asked(self):
        with pytest.raises(ValidationGap, match="applied_changes"):
            ActionResponse.from_dict({"success": True}, require_applied=True)
        # plain apply replies carry no list
        assert ActionResponse.from_dict({"success": True}).applied_changes == []
        # a failed completion needs no list either
        resp = ActionResponse.from_dict({"success": False, "error": "busy"},
                                        require_applied=True)
        assert not resp.success
