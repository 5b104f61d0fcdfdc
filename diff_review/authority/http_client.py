import asyncio
import logging

import requests

from .base import Authority
from ..errors import AuthorityError

logger = logging.getLogger(__name__)


class HttpAuthority(Authority):
    """Talks to the review server's ``/api/session`` endpoints.

    ``requests`` is blocking, so every call runs in a worker thread to keep
    the event loop free for navigation and dialogs.
    """

    def __init__(self, base_url: str, connect_timeout: float = 10.0,
                 read_timeout: float = 60.0,
                 session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = (connect_timeout, read_timeout)
        self._http = session or requests.Session()

    def _url(self, session_id: str, action: str = "") -> str:
        url = f"{self.base_url}/api/session/{session_id}"
        return f"{url}/{action}" if action else url

    def _request(self, method: str, url: str, payload: dict | None = None) -> dict:
        logger.debug(f"[Authority] {method} {url} {payload or ''}")
        try:
            response = self._http.request(method, url, json=payload,
                                          timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise AuthorityError(f"Request timed out: {method} {url}") from e
        except requests.exceptions.RequestException as e:
            raise AuthorityError(f"Request failed: {e}") from e
        except ValueError as e:
            raise AuthorityError(f"Invalid JSON from {url}") from e
        logger.debug(f"[Authority] Response: {data}")
        return data

    async def _call(self, method: str, url: str, payload: dict | None = None) -> dict:
        return await asyncio.to_thread(self._request, method, url, payload)

    async def load_session(self, session_id: str) -> dict:
        return await self._call("GET", self._url(session_id))

    async def apply_change(self, session_id: str, change_id: str) -> dict:
        return await self._call("POST", self._url(session_id, "apply"),
                                {"change_id": change_id})

    async def unapply_change(self, session_id: str, change_id: str) -> dict:
        return await self._call("POST", self._url(session_id, "unapply"),
                                {"change_id": change_id})

    async def complete_session(self, session_id: str) -> dict:
        return await self._call("POST", self._url(session_id, "complete"))

    async def cancel_session(self, session_id: str) -> dict:
        return await self._call("POST", self._url(session_id, "cancel"))

    def close(self) -> None:
        self._http.close()
