from commit_watcher.feeds.errors import (
    CommitParseError,
    CommitWatcherError,
    MalformedDescriptionError,
    MissingRevisionError,
    UnrecognizedURLError,
)
from commit_watcher.feeds.models import DEFAULT_DESTINATION, CommitRecord, Destination, FeedEntry, FeedSession, RepositoryRef
from commit_watcher.feeds.parser import longest_common_prefix, parse_commit
from commit_watcher.feeds.poller import poll
from commit_watcher.feeds.registry import FeedRegistry
from commit_watcher.feeds.resolver import feed_key, resolve_url

__all__ = [
    "DEFAULT_DESTINATION",
    "CommitParseError",
    "CommitRecord",
    "CommitWatcherError",
    "Destination",
    "FeedEntry",
    "FeedRegistry",
    "FeedSession",
    "MalformedDescriptionError",
    "MissingRevisionError",
    "RepositoryRef",
    "UnrecognizedURLError",
    "feed_key",
    "longest_common_prefix",
    "parse_commit",
    "poll",
    "resolve_url",
]
