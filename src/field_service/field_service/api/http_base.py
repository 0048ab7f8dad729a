from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.exceptions import (
    ApiError,
    AuthorizationError,
    BackendUnavailableError,
    NotFoundError,
)
from .connection import ApiConnection

logger = logging.getLogger(__name__)


def error_message(resp: requests.Response) -> str:
    """Best message the backend gave us: JSON message/error, raw text, reason."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for k in ("message", "error"):
            if body.get(k):
                return str(body[k])
    text = (resp.text or "").strip()
    return text or (resp.reason or f"HTTP {resp.status_code}")


def raise_for_status(resp: requests.Response, *, path: str) -> None:
    if resp.ok:
        return

    message = error_message(resp)
    logger.warning("API error %s on %s: %s", resp.status_code, path, message[:200])
    if resp.status_code in (401, 403):
        raise AuthorizationError(message, status=resp.status_code, path=path)
    if resp.status_code == 404:
        raise NotFoundError(message, status=resp.status_code, path=path)
    raise ApiError(message, status=resp.status_code, path=path)


def decode_json(resp: requests.Response) -> Any:
    if resp.status_code == 204 or not (resp.content or b"").strip():
        return None
    return resp.json()


def send(
    conn: ApiConnection,
    method: str,
    path: str,
    *,
    data: Any = None,
    params: Optional[dict] = None,
) -> requests.Response:
    url = conn.build_url(path)
    headers = conn.auth_headers()
    kwargs: dict[str, Any] = {"headers": headers, "timeout": conn.timeout}
    if data is not None:
        kwargs["json"] = data
    if params:
        kwargs["params"] = params

    try:
        resp = conn.session.request(method.upper(), url, **kwargs)
    except requests.RequestException as e:
        logger.warning("API %s %s failed: %s", method.upper(), path, e)
        raise BackendUnavailableError("Unable to reach the server. Please try again.", path=path) from e

    logger.debug("API %s %s -> %s", method.upper(), path, resp.status_code)
    return resp


def api_request(
    conn: ApiConnection,
    method: str,
    path: str,
    data: Any = None,
    *,
    params: Optional[dict] = None,
) -> Any:
    """Issue one request and return the decoded JSON body.

    Failures raise the ``ApiError`` family; nothing is retried.
    """

    resp = send(conn, method, path, data=data, params=params)
    raise_for_status(resp, path=path)
    return decode_json(resp)
