from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commit_watcher.feeds.models import Destination


@dataclass(frozen=True, slots=True)
class Notification:
    feed_name: str
    revision: str
    author: str
    log_lines: tuple[str, ...]
    link: str
    path_summary: str
    destinations: tuple[Destination, ...]
