from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commit_watcher.notifications.models import Notification


def render_lines(notification: Notification) -> list[str]:
    """Render a commit announcement, one chat line per element.

    eclectus: 1a2b3c4 | alice++ | src/ (2 files):
    eclectus: Fix the bug
    eclectus: review: http://github.com/...
    """
    feed = notification.feed_name
    lines = [f"{feed}: {notification.revision} | {notification.author}++ | {notification.path_summary}:"]
    lines.extend(f"{feed}: {line}" for line in notification.log_lines)
    lines.append(f"{feed}: review: {notification.link}")
    return lines


def render_text(notification: Notification) -> str:
    return "\n".join(render_lines(notification))
