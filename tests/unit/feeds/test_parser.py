from __future__ import annotations

import pytest
from hypothesis import given

from commit_watcher.feeds import MalformedDescriptionError, MissingRevisionError, longest_common_prefix, parse_commit
from commit_watcher.feeds.parser import extract_revision, summarize_paths
from tests.test_utils.factories import FeedEntryFactory
from tests.test_utils.helpers import commit_link
from tests.test_utils.strategies import path_lists, revisions

REVISION = "0123456789abcdef0123456789abcdef01234567"


class TestLongestCommonPrefix:
    @pytest.mark.parametrize(
        ("paths", "expected"),
        [
            pytest.param(["src/ops/perl6.ops", "src/classes/IO.pir"], "src/", id="shared_directory"),
            pytest.param([], "", id="empty"),
            pytest.param(["a/b"], "a/b", id="single_path"),
            pytest.param(["docs/a.pod", "src/b.pir"], "", id="nothing_shared"),
            pytest.param(["src/foo.c", "src/foo.h"], "src/foo.", id="character_wise"),
        ],
    )
    def test_examples(self, paths: list[str], expected: str) -> None:
        assert longest_common_prefix(paths) == expected

    @pytest.mark.property_based
    @given(paths=path_lists)
    def test_result_is_prefix_of_every_path(self, paths: list[str]) -> None:
        prefix = longest_common_prefix(paths)

        assert all(path.startswith(prefix) for path in paths)

    @pytest.mark.property_based
    @given(paths=path_lists)
    def test_result_cannot_be_extended(self, paths: list[str]) -> None:
        prefix = longest_common_prefix(paths)

        if len(paths) > 1 and all(len(path) > len(prefix) for path in paths):
            assert len({path[len(prefix)] for path in paths}) > 1


class TestSummarizePaths:
    @pytest.mark.parametrize(
        ("paths", "expected"),
        [
            pytest.param([], "", id="no_files"),
            pytest.param(["src/foo.c"], "src/foo.c", id="single_file"),
            pytest.param(["/trunk/a.c", "/trunk/b.c"], "trunk/ (2 files)", id="leading_slash_stripped"),
            pytest.param(["src/a", "src/b", "src/c"], "src/ (3 files)", id="file_count"),
            pytest.param(["README", "src/b"], " (2 files)", id="empty_prefix_keeps_count"),
        ],
    )
    def test_examples(self, paths: list[str], expected: str) -> None:
        assert summarize_paths(paths) == expected


class TestExtractRevision:
    @given(revision=revisions)
    def test_finds_revision_in_commit_link(self, revision: str) -> None:
        assert extract_revision(commit_link(revision)) == revision

    @pytest.mark.parametrize(
        "link",
        [
            "http://github.com/bschmalhofer/eclectus/commits/master",
            "http://github.com/bschmalhofer/eclectus/commit/0123456",
            "http://github.com/bschmalhofer/eclectus/commit/0123456789ABCDEF0123456789ABCDEF01234567",
        ],
    )
    def test_returns_none_without_full_lowercase_revision(self, link: str) -> None:
        assert extract_revision(link) is None


class TestParseCommit:
    def test_single_file_commit(self) -> None:
        entry = FeedEntryFactory.build(link=commit_link(REVISION), content="<pre>+ src/foo.c\n\nFix the bug\n</pre>")

        record = parse_commit(entry)

        assert record.revision == REVISION
        assert record.short_revision == "0123456"
        assert record.changed_files == ("src/foo.c",)
        assert record.log_lines == ("Fix the bug",)
        assert record.path_summary == "src/foo.c"
        assert record.author == "bschmalhofer"

    def test_multi_file_commit_with_markup_and_svn_trailer(self) -> None:
        content = (
            "<div><pre>m src/ops/perl6.ops\n"
            "+ src/classes/IO.pir\n"
            "- src/classes/Old.pir\n"
            "\n"
            "Add IO &amp; ops<br />\n"
            "see &lt;RT #42&gt;\n"
            "git-svn-id: http://svn.perl.org/parrot/trunk@36000 d31e2699-5ff4-0310-a27c-f18f2fbe73fe\n"
            "\n"
            "</pre></div>"
        )
        entry = FeedEntryFactory.build(link=commit_link(REVISION), content=content)

        record = parse_commit(entry)

        assert record.changed_files == ("src/ops/perl6.ops", "src/classes/IO.pir", "src/classes/Old.pir")
        assert record.log_lines == ("Add IO & ops", "see <RT #42>")
        assert record.path_summary == "src/ (3 files)"

    def test_blank_lines_inside_log_collapse(self) -> None:
        entry = FeedEntryFactory.build(content="<pre>m a.c\n\nFirst paragraph\r\n\r\nSecond paragraph\n\n\n</pre>")

        record = parse_commit(entry)

        assert record.log_lines == ("First paragraph", "Second paragraph")

    def test_missing_author_defaults_to_unknown(self) -> None:
        entry = FeedEntryFactory.build(author=None)

        assert parse_commit(entry).author == "unknown"

    def test_empty_preformatted_block_has_no_files_or_log(self) -> None:
        entry = FeedEntryFactory.build(content="<pre></pre>")

        record = parse_commit(entry)

        assert record.changed_files == ()
        assert record.log_lines == ()
        assert record.path_summary == ""

    def test_body_without_pre_block_is_used_as_is(self) -> None:
        entry = FeedEntryFactory.build(content="\nJust a message")

        record = parse_commit(entry)

        assert record.changed_files == ()
        assert record.log_lines == ("Just a message",)

    def test_missing_revision_raises(self) -> None:
        entry = FeedEntryFactory.build(link="http://github.com/bschmalhofer/eclectus/commits/master")

        with pytest.raises(MissingRevisionError):
            parse_commit(entry)

    def test_file_list_without_separator_raises(self) -> None:
        entry = FeedEntryFactory.build(content="<pre>m src/foo.c\nFix the bug\n</pre>")

        with pytest.raises(MalformedDescriptionError) as exc_info:
            parse_commit(entry)

        assert exc_info.value.reason == "error parsing filenames from description"

    def test_missing_content_raises(self) -> None:
        entry = FeedEntryFactory.build(content=None)

        with pytest.raises(MalformedDescriptionError):
            parse_commit(entry)
