"""Recognition of GitHub repository URLs.

Handles the URL shapes that project pages link to::

    http://github.com/tene/gil/
    http://wiki.github.com/TiMBuS/fun
    http://bschmalhofer.github.com/hq9plus/

with or without a trailing ``/`` or ``/tree/master``.
"""

from __future__ import annotations

import re

from commit_watcher.feeds.errors import UnrecognizedURLError
from commit_watcher.feeds.models import RepositoryRef

_REPOSITORY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"http://(?:wiki\.)?github\.com/(?P<owner>[^/]+)/(?P<project>[^/?#]+)/?"),
    re.compile(r"http://(?P<owner>[^./]+)\.github\.com/(?P<project>[^/?#]+)/?"),
)

FEED_URL_TEMPLATE = "http://github.com/feeds/{owner}/commits/{project}/master"


def feed_url_for(owner: str, project: str) -> str:
    return FEED_URL_TEMPLATE.format(owner=owner, project=project)


def resolve_url(url: str) -> RepositoryRef:
    for pattern in _REPOSITORY_PATTERNS:
        match = pattern.match(url)
        if match is None:
            continue
        owner = match.group("owner")
        project = match.group("project")
        return RepositoryRef(owner=owner, project=project, feed_url=feed_url_for(owner, project))
    raise UnrecognizedURLError(url)


def feed_key(project: str) -> str:
    return f"{project}log".replace("-", "_")
