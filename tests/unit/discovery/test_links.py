from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from commit_watcher.discovery import LinkDiscovery, extract_links
from commit_watcher.feeds import Destination, FeedRegistry
from commit_watcher.source import FetchError
from tests.test_utils.fakes import FakeFetcher, ok_result
from tests.test_utils.helpers import read_fixture

PAGE_URL = "http://www.parrot.org/languages"


def test_extract_links_resolves_and_dedupes() -> None:
    links = extract_links(read_fixture("html/languages.html"), PAGE_URL)

    assert links == [
        "http://github.com/tene/gil/",
        "http://wiki.github.com/TiMBuS/fun",
        "http://bschmalhofer.github.com/hq9plus/",
        "http://github.com/tene/gil/tree/master",
        "http://svn.example.org/lolcode/",
        "http://www.parrot.org/wiki/Pipp",
    ]


def test_extract_links_rejects_empty_selector() -> None:
    with pytest.raises(ValueError, match="selector cannot be empty"):
        extract_links("<a href='x'>x</a>", PAGE_URL, selector="")


def test_extract_links_rejects_invalid_selector() -> None:
    with pytest.raises(ValueError, match="Invalid selector"):
        extract_links("<a href='x'>x</a>", PAGE_URL, selector="a[")


@pytest.mark.property_based
@given(html=st.text(alphabet=st.characters(blacklist_categories=("Cs", "Cc")), max_size=300))
def test_extract_links_never_crashes_on_arbitrary_text(html: str) -> None:
    links = extract_links(html, PAGE_URL)

    assert all(isinstance(link, str) for link in links)


async def test_discover_registers_each_repository_once() -> None:
    registry = FeedRegistry()
    fetcher = FakeFetcher({PAGE_URL: [ok_result(read_fixture("html/languages.html"))]})
    discovery = LinkDiscovery(fetcher=fetcher, registry=registry)

    sessions = await discovery.discover(PAGE_URL, Destination("freenode", "#perl6"))

    assert [session.key for session in sessions] == ["gillog", "funlog", "hq9pluslog"]
    assert len(registry) == 3
    gil = registry.get("gillog")
    assert gil is not None
    assert gil.destinations == [Destination("freenode", "#perl6")]


async def test_discover_fetch_failure_registers_nothing() -> None:
    registry = FeedRegistry()
    fetcher = FakeFetcher({PAGE_URL: [FetchError(PAGE_URL, "HTTP 500")]})
    discovery = LinkDiscovery(fetcher=fetcher, registry=registry)

    assert await discovery.discover(PAGE_URL) == []
    assert len(registry) == 0
