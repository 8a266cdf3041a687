"""GitHub REST client implementation"""

import json
import logging
import urllib.parse
from collections.abc import Callable
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from changeset_mcp._github._errors import TransportError, error_for_status
from changeset_mcp.settings import GITHUB_ACCEPT, settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_headers(token: str) -> dict[str, str]:
    """request headers for the given bearer token"""
    return {
        "Authorization": f"Bearer {token}",
        "Accept": GITHUB_ACCEPT,
    }


def quote_ref(branch: str) -> str:
    """percent-encode a branch name for use in a ref path

    `#`, `?` and `%` are legal in branch names but are URL syntax.
    """
    return urllib.parse.quote(branch, safe="/")


def open_client(token: str) -> httpx.Client:
    """open an HTTP client bound to one credential

    no timeout is set here; the transport default applies.
    """
    return httpx.Client(headers=build_headers(token))


def make_github_request(
    method: str,
    path: str,
    token: str,
    json_body: dict[str, Any] | None = None,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """make a request to the GitHub REST API

    Args:
        method: HTTP method (e.g., 'GET', 'POST', 'PATCH')
        path: API path starting with '/' (e.g., '/repos/owner/repo/git/trees')
        token: bearer credential, sent as-is
        json_body: optional JSON request body
        client: optional open client; a one-off request is made without one

    Returns:
        decoded JSON response body

    Raises:
        GitHubAPIError: a subclass matching the failure (see error_for_status)
    """
    url = f"{settings.github_api_url.rstrip('/')}{path}"
    headers = build_headers(token)

    try:
        if client is None:
            response = httpx.request(method, url, json=json_body, headers=headers)
        else:
            response = client.request(method, url, json=json_body, headers=headers)
    except httpx.RequestError as e:
        raise TransportError(f"failed to communicate with GitHub: {e}") from e

    logger.debug("%s %s -> %s", method, path, response.status_code)

    if response.is_error:
        payload = _response_payload(response)
        detail = extract_error_message(payload)
        error_cls = error_for_status(response.status_code)
        message = f"GitHub {method} {path} failed ({response.status_code})"
        if detail:
            message = f"{message}: {detail}"
        raise error_cls(message, response.status_code, payload)

    try:
        return response.json()
    except json.JSONDecodeError as e:
        raise TransportError(
            f"GitHub {method} {path} returned malformed JSON",
            response.status_code,
            response.text,
        ) from e


def parse_api_response(
    parser: Callable[[dict[str, Any]], T], response: dict[str, Any], what: str
) -> T:
    """run a from_api_response constructor, treating missing keys as a bad response"""
    try:
        return parser(response)
    except (KeyError, TypeError, IndexError, ValidationError) as e:
        raise TransportError(
            f"GitHub response missing {what}", payload=response
        ) from e


def _response_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text.strip() or None


def extract_error_message(payload: Any) -> str | None:
    """pull a readable message out of GitHub's error body

    GitHub errors look like {"message": "...", "errors": [{"message": "..."}, ...]}
    """
    if isinstance(payload, str):
        return payload or None
    if not isinstance(payload, dict):
        return None

    message = payload.get("message")
    errors = payload.get("errors")
    extra = None
    if isinstance(errors, list):
        extra_messages: list[str] = []
        for error in errors:
            if isinstance(error, dict) and "message" in error:
                extra_messages.append(str(error["message"]))
            elif isinstance(error, str):
                extra_messages.append(error)
        if extra_messages:
            extra = "; ".join(extra_messages)
    if message and extra:
        return f"{message}: {extra}"
    return extra or message
