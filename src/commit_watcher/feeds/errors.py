"""Errors raised by the commit feed core."""

from __future__ import annotations


class CommitWatcherError(Exception):
    """Base class for commit feed errors."""


class CommitParseError(CommitWatcherError):
    """Raised when a feed entry cannot be turned into a commit record."""

    def __init__(self, link: str, reason: str) -> None:
        self.link = link
        self.reason = reason
        super().__init__(f"{reason}: {link}")


class MissingRevisionError(CommitParseError):
    def __init__(self, link: str) -> None:
        super().__init__(link, "no commit revision in link")


class MalformedDescriptionError(CommitParseError):
    def __init__(self, link: str) -> None:
        super().__init__(link, "error parsing filenames from description")


class UnrecognizedURLError(CommitWatcherError):
    """Raised when a URL does not look like a hosted repository."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"can't handle {url}")
