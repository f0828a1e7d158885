from tests.test_utils.fakes.source import NOT_MODIFIED, FakeFetcher, ok_result

__all__ = ["NOT_MODIFIED", "FakeFetcher", "ok_result"]
