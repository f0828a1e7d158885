from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol

from structlog.contextvars import bound_contextvars

from commit_watcher.feeds.poller import poll
from commit_watcher.observability import get_logger
from commit_watcher.source.atom import parse_atom
from commit_watcher.source.http_fetcher import FetchError

if TYPE_CHECKING:
    from commit_watcher.feeds.models import FeedSession
    from commit_watcher.feeds.registry import FeedRegistry
    from commit_watcher.notifications import Notification, Notifier
    from commit_watcher.source.http_fetcher import FetchResult

logger = get_logger(__name__)


class Fetcher(Protocol):
    async def fetch(self, url: str, *, etag: str | None = None, last_modified: str | None = None) -> FetchResult: ...


class FeedWatcher:
    def __init__(self, *, registry: FeedRegistry, fetcher: Fetcher, notifier: Notifier) -> None:
        self._registry = registry
        self._fetcher = fetcher
        self._notifier = notifier
        self._locks: dict[str, asyncio.Lock] = {}

    async def poll_all(self) -> None:
        sessions = list(self._registry)
        logger.info("watch_cycle_started", feeds=len(sessions))
        for session in sessions:
            await self.poll_feed(session.key)
        logger.info("watch_cycle_completed", feeds=len(sessions))

    async def poll_feed(self, key: str) -> list[Notification]:
        session = self._registry.get(key)
        if session is None:
            logger.warning("unknown_feed", feed=key)
            return []

        with bound_contextvars(feed_key=key):
            async with self._locks.setdefault(key, asyncio.Lock()):
                notifications = await self._poll_session(session)

            for notification in notifications:
                await self._notifier.send(notification)
        return notifications

    async def _poll_session(self, session: FeedSession) -> list[Notification]:
        try:
            result = await self._fetcher.fetch(session.url, etag=session.etag, last_modified=session.last_modified)
        except FetchError as exc:
            # the session is left untouched so the next tick starts from the same state
            logger.warning("feed_fetch_failed", feed=session.name, url=session.url, reason=exc.reason)
            return []

        if not result.is_modified or result.content is None:
            logger.debug("feed_not_modified", feed=session.name)
            return []

        notifications = poll(session, parse_atom(result.content))
        session.etag = result.etag
        session.last_modified = result.last_modified
        return notifications
