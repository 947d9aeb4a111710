"""
Microsoft Graph ``/users`` calls with a delegated access token.

Uses plain REST through ``requests``. Required delegated permissions:
``User.Read`` for lookups, ``User.ReadWrite.All`` to create users.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import requests

from .models import GraphUser

logger = logging.getLogger(__name__)

GRAPH_BASE = "https://graph.microsoft.com/v1.0"


class GraphServiceError(Exception):
    """Graph answered with an error (or could not be reached)."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp: requests.Response) -> str:
    """Graph errors look like ``{"error": {"code": ..., "message": ...}}``."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason or f"HTTP {resp.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return resp.text or f"HTTP {resp.status_code}"


class GraphUserService:
    def __init__(self, access_token: str, base_url: str = GRAPH_BASE, timeout: float = 10) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {"Authorization": f"Bearer {access_token}", "Content-Type": "application/json"}

    def _send(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self._base_url}{path}"
        try:
            resp = requests.request(method, url, headers=self._headers, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("Graph request failed: %s", type(e).__name__)
            raise GraphServiceError(f"Graph unreachable: {type(e).__name__}", 503) from e

        if not resp.ok:
            message = _error_message(resp)
            logger.warning("Graph %s %s returned status=%s", method, path, resp.status_code)
            raise GraphServiceError(message, resp.status_code)
        return resp

    def get_users(self, select: Iterable[str] | None = None, filter: str | None = None) -> list[GraphUser]:
        """``GET /users`` with optional ``$select`` / ``$filter``; first page only."""
        params: dict[str, str] = {}
        if select:
            params["$select"] = ",".join(select)
        if filter:
            params["$filter"] = filter

        body = self._send("GET", "/users", params=params).json()
        return [GraphUser.model_validate(entry) for entry in body.get("value") or []]

    def create_user(self, user: GraphUser) -> GraphUser | None:
        """``POST /users``; returns the created user, or None when Graph sends no body."""
        resp = self._send("POST", "/users", json=user.to_graph())
        if not resp.content:
            return None
        return GraphUser.model_validate(resp.json())
