"""
HTTP client for the NYC58 API.

Mirrors the front end's request helpers: registration, login and the
current-user lookup.  The underlying ``httpx.Client`` keeps the session
cookie set by ``login`` so later calls are authenticated.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)

# Default registration payload; callers' values are merged over a copy.
REGISTRATION_TEMPLATE: Mapping[str, str] = MappingProxyType({
    "username": "",
    "email": "",
    "password": "",
    "confirmPassword": "",
})


class ApiClientError(Exception):
    """A request came back with a non-2xx status."""

    def __init__(self, message: str, status: int, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


def build_url(base_url: str, path: str) -> str:
    """Join ``base_url`` and ``path``; an empty base leaves the path relative."""
    path = path if path.startswith("/") else f"/{path}"
    base = base_url.rstrip("/")
    return f"{base}{path}" if base else path


def handle_response(response: httpx.Response) -> Any:
    """Decode the body (JSON or text) and raise ``ApiClientError`` on failure."""
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            payload = response.json()
        except ValueError:
            payload = {}
    else:
        payload = response.text

    if not response.is_success:
        if isinstance(payload, str) and payload:
            message = payload
        elif isinstance(payload, dict) and payload.get("message"):
            message = payload["message"]
        else:
            message = f"Request failed with status {response.status_code}"
        raise ApiClientError(message, response.status_code, payload)

    return payload


class Nyc58Client:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        http_client: Optional[httpx.Client] = None,
        timeout: float = 15.0,
    ) -> None:
        self.base_url = base_url
        self._http = http_client or httpx.Client(timeout=timeout)

    # ── Auth ────────────────────────────────────────────────────────────

    def register(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
        phone: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = dict(REGISTRATION_TEMPLATE)
        payload.update(
            username=username,
            email=email,
            password=password,
            confirmPassword=confirm_password,
        )
        if phone is not None:
            payload["phone"] = phone
        return self._post("/api/v1/user/registration", payload)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._post("/api/v1/user/login", {"email": email, "password": password})

    def current_user(self) -> Dict[str, Any]:
        return self._get("/api/v1/user-info")

    def health(self) -> Dict[str, Any]:
        return self._get("/health")

    # ── Plumbing ────────────────────────────────────────────────────────

    def _post(self, path: str, body: Dict[str, Any]) -> Any:
        url = build_url(self.base_url, path)
        logger.debug("POST %s", url)
        return handle_response(self._http.post(url, json=body))

    def _get(self, path: str) -> Any:
        url = build_url(self.base_url, path)
        logger.debug("GET %s", url)
        return handle_response(self._http.get(url))

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "Nyc58Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
