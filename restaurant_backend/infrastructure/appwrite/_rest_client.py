"""Thin Appwrite REST API client (no appwrite SDK).

Speaks the Appwrite v1 REST API directly with project / API-key / session
headers. All HTTP calls use httpx.AsyncClient so they do not block the
event loop. Non-2xx responses become AppwriteException; 409 becomes
AppwriteConflictError so callers can treat "already exists" explicitly.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from restaurant_backend.domain.exceptions import (
    RemoteConflictException,
    RemoteStoreException,
    RemoteTransportException,
)

logger = logging.getLogger(__name__)


class AppwriteException(RemoteStoreException):
    """Raised for any non-2xx Appwrite response.

    message is Appwrite's message, code the HTTP status (0 for transport
    failures) and type the Appwrite error type, e.g. 'collection_not_found'.
    """


class AppwriteConflictError(AppwriteException, RemoteConflictException):
    """Raised when a create call returns 409 (object id or key already exists)."""


class AppwriteTransportError(AppwriteException, RemoteTransportException):
    """Raised when the request never produced an HTTP response (DNS, timeout, reset)."""


def _raise_for_response(resp: httpx.Response) -> None:
    if resp.status_code < 400:
        return
    message = resp.reason_phrase or "Appwrite request failed"
    error_type = None
    try:
        payload = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None
    if isinstance(payload, dict):
        message = payload.get("message") or message
        error_type = payload.get("type")
    if resp.status_code == 409:
        raise AppwriteConflictError(message, resp.status_code, error_type)
    raise AppwriteException(message, resp.status_code, error_type)


class AppwriteRESTClient:
    """Lightweight Appwrite client using the REST API (no SDK)."""

    def __init__(
        self,
        endpoint: str,
        project_id: str,
        *,
        api_key: str | None = None,
        session_secret: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        self_signed: bool = False,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._project_id = project_id
        self._api_key = api_key
        self._session_secret = session_secret
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=timeout, verify=not self_signed)
        )
        self._owns_http = http_client is None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def has_session(self) -> bool:
        return self._session_secret is not None

    def set_session(self, secret: str | None) -> None:
        """Attach (or clear) the user session secret sent as X-Appwrite-Session."""
        self._session_secret = secret

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "AppwriteRESTClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _headers(self, *, json_body: bool) -> dict[str, str]:
        headers = {"X-Appwrite-Project": self._project_id}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self._api_key:
            headers["X-Appwrite-Key"] = self._api_key
        if self._session_secret:
            headers["X-Appwrite-Session"] = self._session_secret
        return headers

    def url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self._endpoint}{path}"

    async def call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Perform a request against the Appwrite API and return the decoded JSON body.

        Empty bodies (e.g. 204 on DELETE) decode to {}.

        Raises:
            AppwriteConflictError: on HTTP 409.
            AppwriteException: on any other non-2xx status, or a 2xx body that
                is not JSON.
            AppwriteTransportError: when no response was received.
        """
        method = method.upper()
        if method not in ("GET", "POST", "PUT", "PATCH", "DELETE"):
            raise ValueError(f"Unsupported method: {method!r}")
        multipart = files is not None
        try:
            resp = await self._http.request(
                method,
                self.url(path),
                params=params,
                json=body if not multipart else None,
                data=data if multipart else None,
                files=files,
                headers=self._headers(json_body=not multipart and body is not None),
            )
        except httpx.TransportError as exc:
            logger.warning("Appwrite request failed (method=%s path=%s): %s", method, path, exc)
            raise AppwriteTransportError(f"Appwrite request failed: {exc}") from exc
        _raise_for_response(resp)
        raw = resp.content
        if not raw:
            return {}
        try:
            decoded = json.loads(raw.decode())
        except ValueError as exc:
            logger.warning("Non-JSON reply from Appwrite (method=%s path=%s)", method, path)
            raise AppwriteException(
                f"Invalid JSON from Appwrite: {exc}", resp.status_code
            ) from exc
        return decoded if isinstance(decoded, dict) else {"data": decoded}

    async def ping(self) -> str:
        """Call GET /ping and return the plain-text reply (e.g. 'Pong!')."""
        try:
            resp = await self._http.get(self.url("/ping"), headers=self._headers(json_body=False))
        except httpx.TransportError as exc:
            raise AppwriteTransportError(f"Appwrite request failed: {exc}") from exc
        _raise_for_response(resp)
        return resp.text
