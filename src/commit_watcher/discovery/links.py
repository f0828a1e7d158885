"""Link discovery: find repository links on a web page and register them."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from commit_watcher.observability import get_logger
from commit_watcher.source.http_fetcher import FetchError

if TYPE_CHECKING:
    from commit_watcher.feeds.models import Destination, FeedSession
    from commit_watcher.feeds.registry import FeedRegistry
    from commit_watcher.source.http_fetcher import HttpFetcher

logger = get_logger(__name__)

LINK_SELECTOR = "a[href]"


def extract_links(html: str, base_url: str, *, selector: str = LINK_SELECTOR) -> list[str]:
    if not selector:
        msg = "selector cannot be empty"
        raise ValueError(msg)

    soup = BeautifulSoup(html, "lxml")
    try:
        elements = soup.select(selector)
    except (SelectorSyntaxError, NotImplementedError) as exc:
        msg = f"Invalid selector: {selector}"
        raise ValueError(msg) from exc

    seen: set[str] = set()
    links: list[str] = []
    for element in elements:
        href = element.get("href")
        if not isinstance(href, str) or not href:
            continue
        link = urljoin(base_url, href)
        if link in seen:
            continue
        seen.add(link)
        links.append(link)
    return links


class LinkDiscovery:
    def __init__(self, *, fetcher: HttpFetcher, registry: FeedRegistry) -> None:
        self._fetcher = fetcher
        self._registry = registry

    async def discover(self, page_url: str, destination: Destination | None = None) -> list[FeedSession]:
        try:
            result = await self._fetcher.fetch(page_url)
        except FetchError as exc:
            logger.warning("discovery_fetch_failed", url=page_url, reason=exc.reason)
            return []
        if result.content is None:
            return []
        return self.submit_all(extract_links(result.content, page_url), destination)

    def submit_all(self, urls: list[str], destination: Destination | None = None) -> list[FeedSession]:
        sessions: dict[str, FeedSession] = {}
        for url in urls:
            if "github.com" not in url:
                continue
            session = self._registry.register_or_extend(url, destination)
            if session is not None:
                sessions.setdefault(session.key, session)
        logger.info("discovery_completed", links=len(urls), feeds=len(sessions))
        return list(sessions.values())
