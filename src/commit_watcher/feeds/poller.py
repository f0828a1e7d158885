from __future__ import annotations

from typing import TYPE_CHECKING

from commit_watcher.feeds.errors import CommitParseError
from commit_watcher.feeds.parser import parse_commit
from commit_watcher.notifications.models import Notification
from commit_watcher.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from commit_watcher.feeds.models import CommitRecord, FeedEntry, FeedSession

logger = get_logger(__name__)


def poll(session: FeedSession, entries: Iterable[FeedEntry]) -> list[Notification]:
    """Return notifications for commits ``session`` has not seen yet.

    The first poll of a session only fills the seen cache, so a restart does
    not replay the visible history.  Entries that fail to parse are logged
    and left unseen; they are parsed again on every later poll.
    """
    notifications: list[Notification] = []
    first_poll = not session.has_completed_first_poll

    for entry in sorted(entries, key=lambda e: e.updated):
        try:
            record = parse_commit(entry)
        except CommitParseError as exc:
            logger.warning("commit_parse_failed", feed=session.name, link=entry.link, reason=exc.reason)
            continue

        if first_poll:
            session.seen_revisions.add(record.revision)
            continue
        if record.revision in session.seen_revisions:
            continue

        session.seen_revisions.add(record.revision)
        notifications.append(_build_notification(session, record, entry.link))
        logger.info("notification_emitted", feed=session.name, revision=record.short_revision)

    session.has_completed_first_poll = True
    logger.info(
        "poll_completed",
        feed=session.name,
        first_poll=first_poll,
        notifications=len(notifications),
        seen=len(session.seen_revisions),
    )
    return notifications


def _build_notification(session: FeedSession, record: CommitRecord, link: str) -> Notification:
    return Notification(
        feed_name=session.name,
        revision=record.short_revision,
        author=record.author,
        log_lines=record.log_lines,
        link=link,
        path_summary=record.path_summary,
        destinations=tuple(session.destinations),
    )
