from __future__ import annotations

import itertools
import threading
from typing import TYPE_CHECKING

from commit_watcher.feeds.errors import UnrecognizedURLError
from commit_watcher.feeds.models import DEFAULT_DESTINATION, Destination, FeedSession
from commit_watcher.feeds.resolver import feed_key, resolve_url
from commit_watcher.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

logger = get_logger(__name__)

DEFAULT_BASE_INTERVAL = 300


class FeedRegistry:
    """Owns one ``FeedSession`` per canonical feed key.

    New sessions get ``base_interval + n`` as polling interval, ``n`` counting
    registrations from 1, so feeds added together do not poll in lockstep.
    """

    def __init__(
        self,
        *,
        base_interval: int = DEFAULT_BASE_INTERVAL,
        default_destination: Destination = DEFAULT_DESTINATION,
        on_register: Callable[[FeedSession], None] | None = None,
    ) -> None:
        if base_interval <= 0:
            msg = "base_interval must be positive"
            raise ValueError(msg)
        self._base_interval = base_interval
        self._default_destination = default_destination
        self._on_register = on_register
        self._sessions: dict[str, FeedSession] = {}
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()

    def __contains__(self, key: object) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[FeedSession]:
        return iter(list(self._sessions.values()))

    def get(self, key: str) -> FeedSession | None:
        return self._sessions.get(key)

    def set_on_register(self, callback: Callable[[FeedSession], None]) -> None:
        self._on_register = callback

    def register_or_extend(self, url: str, destination: Destination | None = None) -> FeedSession | None:
        try:
            repository = resolve_url(url)
        except UnrecognizedURLError:
            logger.warning("unrecognized_repository_url", url=url)
            return None
        return self.add_feed(repository.project, repository.feed_url, [destination or self._default_destination])

    def add_feed(self, name: str, url: str, destinations: Iterable[Destination]) -> FeedSession:
        key = feed_key(name)
        targets = list(destinations) or [self._default_destination]

        with self._lock:
            session = self._sessions.get(key)
            if session is not None:
                for destination in targets:
                    if session.add_destination(destination):
                        logger.info("feed_destination_added", feed=key, destination=str(destination))
                return session

            session = FeedSession(
                key=key,
                name=name,
                url=url,
                interval_seconds=self._base_interval + next(self._sequence),
            )
            for destination in targets:
                session.add_destination(destination)
            self._sessions[key] = session

        logger.info(
            "feed_registered",
            feed=key,
            url=url,
            interval_seconds=session.interval_seconds,
            destinations=[str(d) for d in session.destinations],
        )
        if self._on_register is not None:
            self._on_register(session)
        return session
