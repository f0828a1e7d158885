from commit_watcher.notifications.base import Notifier
from commit_watcher.notifications.models import Notification
from commit_watcher.notifications.render import render_lines, render_text
from commit_watcher.notifications.slack import SlackNotifier

__all__ = ["Notification", "Notifier", "SlackNotifier", "render_lines", "render_text"]
