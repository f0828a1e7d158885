"""Atom commit feed parsing into ``FeedEntry`` values."""

from __future__ import annotations

import time
from datetime import UTC, datetime

import feedparser

from commit_watcher.feeds.models import FeedEntry

# entries without a usable timestamp sort before everything else
_EPOCH = datetime.min.replace(tzinfo=UTC)


def parse_atom(content: str) -> list[FeedEntry]:
    parsed = feedparser.parse(content or "")
    entries: list[FeedEntry] = []
    for entry in parsed.entries or []:
        link = _entry_link(entry)
        if link is None:
            continue
        entries.append(
            FeedEntry(
                link=link,
                updated=_parse_updated(entry),
                author=_get_str(entry, "author"),
                content=_content_body(entry),
            ),
        )
    return entries


def _entry_link(entry: object) -> str | None:
    # feedparser copies a permalink-style <id> into .link when no <link> exists
    for link in getattr(entry, "links", None) or []:
        href = link.get("href")
        if link.get("rel", "alternate") == "alternate" and isinstance(href, str) and href.strip():
            return href.strip()
    if getattr(entry, "guidislink", False):
        return None
    return _get_str(entry, "link")


def _content_body(entry: object) -> str | None:
    content = getattr(entry, "content", None)
    if content:
        value = content[0].get("value")
        if isinstance(value, str) and value:
            return value
    return _get_str(entry, "summary")


def _parse_updated(entry: object) -> datetime:
    parsed = getattr(entry, "updated_parsed", None)
    if parsed is None:
        parsed = getattr(entry, "published_parsed", None)
    if not isinstance(parsed, time.struct_time):
        return _EPOCH
    try:
        year, month, day, hour, minute, second = parsed[:6]
        return datetime(year, month, day, hour, minute, second, tzinfo=UTC)
    except (TypeError, ValueError, OverflowError):
        return _EPOCH


def _get_str(obj: object, name: str) -> str | None:
    value = getattr(obj, name, None)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None
