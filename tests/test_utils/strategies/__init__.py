from tests.test_utils.strategies.commits import path_lists, path_strategy, revisions

__all__ = ["path_lists", "path_strategy", "revisions"]
