from commit_watcher.core.scheduler import FeedScheduler, ScheduledJob
from commit_watcher.core.watcher import FeedWatcher

__all__ = ["FeedScheduler", "FeedWatcher", "ScheduledJob"]
