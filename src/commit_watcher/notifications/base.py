from abc import ABC, abstractmethod

from commit_watcher.notifications.models import Notification


class Notifier(ABC):
    @abstractmethod
    async def send(self, notification: Notification) -> None: ...
