"""Commit record extraction from GitHub commit feed entries.

A GitHub commit feed entry carries its description as HTML.  The interesting
part sits inside a ``<pre>`` block laid out as::

    + added/file
    m modified/file
    - removed/file

    Free form log message
    git-svn-id: http://...   (only for svn imports)

The file list comes first, one marker character and a path per line, then a
blank separator line, then the log message.
"""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING

from commit_watcher.feeds.errors import MalformedDescriptionError, MissingRevisionError
from commit_watcher.feeds.models import CommitRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from commit_watcher.feeds.models import FeedEntry

_REVISION_PATTERN = re.compile(r"/commit/([0-9a-f]{40})")
_FILE_LINE_PATTERN = re.compile(r"^[+m-] (.+)")
_LINE_SPLIT_PATTERN = re.compile(r"\r?\n")
_LOG_SPLIT_PATTERN = re.compile(r"[\r\n]+")
_BREAK_PATTERN = re.compile(r"<br */>")
_SVN_TRAILER_PREFIX = "git-svn-id: http:"

_NO_MESSAGE = "(no commit message)"
_UNKNOWN_AUTHOR = "unknown"


def extract_revision(link: str) -> str | None:
    match = _REVISION_PATTERN.search(link)
    if match is None:
        return None
    return match.group(1)


def longest_common_prefix(paths: Sequence[str]) -> str:
    """Return the character-wise common prefix of ``paths``.

    ``["src/ops/perl6.ops", "src/classes/IO.pir"]`` gives ``"src/"``.
    """
    if not paths:
        return ""
    prefix = paths[0]
    for path in paths[1:]:
        while not path.startswith(prefix):
            prefix = prefix[:-1]
    return prefix


def summarize_paths(paths: Sequence[str]) -> str:
    summary = longest_common_prefix(paths).removeprefix("/")
    if len(paths) > 1:
        summary += f" ({len(paths)} files)"
    return summary


def parse_commit(entry: FeedEntry) -> CommitRecord:
    revision = extract_revision(entry.link)
    if revision is None:
        raise MissingRevisionError(entry.link)

    body = entry.content if entry.content is not None else _NO_MESSAGE
    lines = _LINE_SPLIT_PATTERN.split(_preformatted_body(body))

    files: list[str] = []
    while lines:
        match = _FILE_LINE_PATTERN.match(lines[0])
        if match is None:
            break
        files.append(match.group(1))
        lines.pop(0)

    # an empty body has neither files nor a separator line
    if lines and lines[0] != "":
        raise MalformedDescriptionError(entry.link)
    lines = lines[1:]

    _drop_trailing_blanks(lines)
    if lines and lines[-1].startswith(_SVN_TRAILER_PREFIX):
        lines.pop()
    _drop_trailing_blanks(lines)

    return CommitRecord(
        revision=revision,
        author=entry.author or _UNKNOWN_AUTHOR,
        changed_files=tuple(files),
        log_lines=_split_log("\n".join(lines)),
        path_summary=summarize_paths(files),
    )


def _preformatted_body(body: str) -> str:
    start = body.find("<pre>")
    end = body.rfind("</pre>")
    if start == -1 or end == -1 or end < start:
        return body
    return body[start + len("<pre>") : end]


def _drop_trailing_blanks(lines: list[str]) -> None:
    while lines and lines[-1] == "":
        lines.pop()


def _split_log(log: str) -> tuple[str, ...]:
    log = html.unescape(_BREAK_PATTERN.sub("", log))
    parts = _LOG_SPLIT_PATTERN.split(log)
    while parts and parts[-1] == "":
        parts.pop()
    return tuple(parts)
