from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from datetime import datetime


class Destination(NamedTuple):
    network: str
    channel: str

    def __str__(self) -> str:
        return f"{self.network}/{self.channel}"


DEFAULT_DESTINATION = Destination("magnet", "#parrot")


@dataclass(frozen=True, slots=True)
class FeedEntry:
    link: str
    updated: datetime
    author: str | None = None
    content: str | None = None


@dataclass(frozen=True, slots=True)
class CommitRecord:
    revision: str
    author: str
    changed_files: tuple[str, ...]
    log_lines: tuple[str, ...]
    path_summary: str

    @property
    def short_revision(self) -> str:
        return self.revision[:7]


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    owner: str
    project: str
    feed_url: str


@dataclass(slots=True)
class FeedSession:
    key: str
    name: str
    url: str
    interval_seconds: int
    destinations: list[Destination] = field(default_factory=list)
    seen_revisions: set[str] = field(default_factory=set)
    has_completed_first_poll: bool = False
    etag: str | None = None
    last_modified: str | None = None

    def __post_init__(self) -> None:
        if not self.key:
            msg = "key cannot be empty"
            raise ValueError(msg)
        if self.interval_seconds <= 0:
            msg = "interval_seconds must be positive"
            raise ValueError(msg)

    def add_destination(self, destination: Destination) -> bool:
        if destination in self.destinations:
            return False
        self.destinations.append(destination)
        return True
