from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus

import httpx


class HTTPHeader(StrEnum):
    IF_NONE_MATCH = "If-None-Match"
    IF_MODIFIED_SINCE = "If-Modified-Since"
    ETAG = "ETag"
    LAST_MODIFIED = "Last-Modified"


class FetchError(Exception):
    """Raised when a feed could not be retrieved."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"failed to fetch {url}: {reason}")


@dataclass(frozen=True, slots=True)
class FetchResult:
    status_code: int
    content: str | None
    etag: str | None
    last_modified: str | None
    is_modified: bool


class HttpFetcher:
    """Single-attempt conditional GET; a failed fetch is skipped until the next tick."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(
        self,
        url: str,
        *,
        etag: str | None = None,
        last_modified: str | None = None,
    ) -> FetchResult:
        headers: dict[str, str] = {}
        if etag is not None:
            headers[HTTPHeader.IF_NONE_MATCH] = etag
        if last_modified is not None:
            headers[HTTPHeader.IF_MODIFIED_SINCE] = last_modified

        try:
            response = await self._client.get(url, headers=headers, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise FetchError(url, type(exc).__name__) from exc

        if response.status_code == HTTPStatus.NOT_MODIFIED:
            return FetchResult(
                status_code=HTTPStatus.NOT_MODIFIED,
                content=None,
                etag=response.headers.get(HTTPHeader.ETAG, etag),
                last_modified=response.headers.get(HTTPHeader.LAST_MODIFIED, last_modified),
                is_modified=False,
            )
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            raise FetchError(url, f"HTTP {response.status_code}")

        return FetchResult(
            status_code=response.status_code,
            content=response.text,
            etag=response.headers.get(HTTPHeader.ETAG),
            last_modified=response.headers.get(HTTPHeader.LAST_MODIFIED),
            is_modified=True,
        )
