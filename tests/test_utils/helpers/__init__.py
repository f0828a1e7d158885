"""Test helpers."""

from tests.test_utils.helpers.feeds import REPOSITORY_URL, commit_body, commit_link, revision_for
from tests.test_utils.helpers.fixture import fixture_path, read_fixture

__all__ = [
    "REPOSITORY_URL",
    "commit_body",
    "commit_link",
    "fixture_path",
    "read_fixture",
    "revision_for",
]
