from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from commit_watcher.notifications.base import Notifier
from commit_watcher.notifications.render import render_text
from commit_watcher.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from commit_watcher.feeds.models import Destination
    from commit_watcher.notifications.models import Notification

logger = get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TimeoutException):
        return True
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR


class SlackNotifier(Notifier):
    """Posts rendered commit announcements to Slack incoming webhooks.

    Each destination network maps to one webhook; the destination channel is
    passed along as the channel override.
    """

    def __init__(self, client: httpx.AsyncClient, webhooks: Mapping[str, str], *, max_attempts: int = 3) -> None:
        self._client = client
        self._webhooks = dict(webhooks)
        self._max_attempts = max_attempts

    async def send(self, notification: Notification) -> None:
        text = render_text(notification)
        for destination in notification.destinations:
            webhook_url = self._webhooks.get(destination.network)
            if webhook_url is None:
                logger.warning("unknown_network", network=destination.network, feed=notification.feed_name)
                continue
            try:
                await self._post(webhook_url, self._build_payload(text, destination))
            except httpx.HTTPError as exc:
                logger.error(
                    "slack_send_failed",
                    feed=notification.feed_name,
                    revision=notification.revision,
                    destination=str(destination),
                    error=str(exc),
                )
                continue
            logger.info("slack_send_succeeded", feed=notification.feed_name, destination=str(destination))

    async def _post(self, webhook_url: str, payload: dict[str, object]) -> None:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception(_is_retryable),
            wait=wait_exponential(multiplier=1, max=60),
            stop=stop_after_attempt(self._max_attempts),
            reraise=True,
        ):
            with attempt:
                response = await self._client.post(webhook_url, json=payload)
                if response.status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
                    logger.warning("slack_send_retry", status_code=response.status_code)
                response.raise_for_status()

    @staticmethod
    def _build_payload(text: str, destination: Destination) -> dict[str, object]:
        return {"text": text, "channel": destination.channel}
