from tests.test_utils.factories.feeds import BASE_TIME, FeedEntryFactory

__all__ = ["BASE_TIME", "FeedEntryFactory"]
