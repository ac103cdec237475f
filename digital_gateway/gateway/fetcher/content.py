"""Fetch product content from a URL and reduce it to plain text."""

from __future__ import annotations

import ipaddress
import json
import logging
import socket
from collections.abc import Callable
from typing import Any
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

MAX_SIZE = 5 * 1024 * 1024
MAX_TEXT_LENGTH = 50_000
MIN_JSON_STRING_LENGTH = 10
TIMEOUT_SECONDS = 30.0
USER_AGENT = "Digital Gateway Content Validator/1.0"
ALLOWED_CONTENT_TYPES = (
    "text/html",
    "text/plain",
    "application/pdf",
    "application/json",
)

Resolver = Callable[[str], str | None]


class FetchError(Exception):
    """Content could not be retrieved or was unusable."""


def _resolve_host(host: str) -> str | None:
    try:
        return socket.gethostbyname(host)
    except OSError:
        return None


def is_private_address(ip: str) -> bool:
    """True for private, loopback, link-local and unique-local addresses."""
    try:
        addr = ipaddress.ip_address(ip)
    except ValueError:
        return False
    return addr.is_private or addr.is_loopback or addr.is_link_local


def _truncate(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def extract_text_from_html(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return _truncate(" ".join(soup.get_text(separator=" ").split()))


def _collect_strings(obj: Any, texts: list[str]) -> list[str]:
    if isinstance(obj, dict):
        for value in obj.values():
            _collect_strings(value, texts)
    elif isinstance(obj, list):
        for value in obj:
            _collect_strings(value, texts)
    elif isinstance(obj, str) and len(obj) > MIN_JSON_STRING_LENGTH:
        texts.append(obj)
    return texts


def extract_text_from_json(body: str) -> str:
    """Join every non-trivial string value, one per line."""
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        return _truncate(body)
    return _truncate("\n".join(_collect_strings(data, [])))


class ContentFetcher:
    """Retrieve text for a resource locator, refusing private networks."""

    def __init__(
        self,
        timeout: float = TIMEOUT_SECONDS,
        resolver: Resolver | None = None,
    ) -> None:
        self._timeout = timeout
        self._resolver = resolver or _resolve_host

    def _validate_url(self, url: str) -> None:
        if not url or not url.strip():
            raise FetchError("URL is required")

        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            raise FetchError("Only HTTP(S) URLs are supported")
        if not parsed.hostname:
            raise FetchError("Invalid host")

        resolved = self._resolver(parsed.hostname)
        if resolved and is_private_address(resolved):
            raise FetchError("Access to private networks is not allowed")

    async def fetch(self, url: str) -> str:
        """Return the text content behind ``url``; raise FetchError on failure."""
        self._validate_url(url)

        headers = {
            "User-Agent": USER_AGENT,
            "Accept": ", ".join(ALLOWED_CONTENT_TYPES),
        }
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout), follow_redirects=False,
            ) as client:
                resp = await client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            raise FetchError(f"Request timeout: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"Connection failed: {e}") from e

        if not resp.is_success:
            raise FetchError(f"HTTP {resp.status_code}: {resp.reason_phrase}")

        text = self._extract_content(resp)
        logger.debug("Fetched %d chars from %s", len(text), url)
        return text

    def _extract_content(self, resp: httpx.Response) -> str:
        body = resp.content
        if not body or not body.strip():
            raise FetchError("Response body is empty")
        if len(body) > MAX_SIZE:
            raise FetchError(f"Content too large (max {MAX_SIZE // (1024 * 1024)}MB)")

        content_type = resp.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type == "text/html":
            return extract_text_from_html(resp.text)
        if content_type == "application/pdf":
            return f"[PDF Document - {len(body)} bytes]"
        if content_type == "application/json":
            return extract_text_from_json(resp.text)
        return _truncate(resp.text)
