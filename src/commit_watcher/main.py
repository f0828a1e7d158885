from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import httpx
import typer

from commit_watcher.config import ConfigError, load_config
from commit_watcher.core import FeedScheduler, FeedWatcher
from commit_watcher.discovery import LinkDiscovery
from commit_watcher.feeds import FeedRegistry, UnrecognizedURLError, feed_key, resolve_url
from commit_watcher.notifications import SlackNotifier
from commit_watcher.observability import configure_logging, get_logger
from commit_watcher.source import HttpFetcher

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from commit_watcher.config import AppConfig
    from commit_watcher.feeds import FeedSession

logger = get_logger(__name__)

app = typer.Typer(add_completion=False)


@dataclass(frozen=True, slots=True)
class ApplicationComponents:
    config: AppConfig
    client: httpx.AsyncClient
    registry: FeedRegistry
    discovery: LinkDiscovery
    watcher: FeedWatcher
    scheduler: FeedScheduler


@asynccontextmanager
async def create_application(config_path: Path) -> AsyncIterator[ApplicationComponents]:
    config = load_config(config_path)

    client = httpx.AsyncClient(timeout=httpx.Timeout(10.0))
    fetcher = HttpFetcher(client)
    notifier = SlackNotifier(client, config.webhooks)
    registry = FeedRegistry(
        base_interval=config.poll_interval_seconds,
        default_destination=config.default_destination.to_destination(),
    )
    watcher = FeedWatcher(registry=registry, fetcher=fetcher, notifier=notifier)
    scheduler = FeedScheduler()

    def schedule_session(session: FeedSession) -> None:
        scheduler.schedule(session.key, session.interval_seconds, watcher.poll_feed)

    registry.set_on_register(schedule_session)

    try:
        yield ApplicationComponents(
            config=config,
            client=client,
            registry=registry,
            discovery=LinkDiscovery(fetcher=fetcher, registry=registry),
            watcher=watcher,
            scheduler=scheduler,
        )
    finally:
        await client.aclose()


async def register_configured_feeds(components: ApplicationComponents) -> None:
    config = components.config
    registry = components.registry
    for feed in config.feeds:
        registry.add_feed(feed.name, feed.url, [d.to_destination() for d in feed.destinations])
    for repository in config.repositories:
        registry.register_or_extend(repository.url, repository.destination(config.default_destination.to_destination()))
    for page_url in config.discovery_pages:
        await components.discovery.discover(page_url)
    logger.info("feeds_configured", feeds=len(registry))


@app.command()
def run(
    config: Annotated[Path, typer.Option("-c", "--config", help="Path to the TOML config file.")],
    once: Annotated[bool, typer.Option("--once", help="Poll every feed once and exit.")] = False,
) -> None:
    configure_logging()
    try:
        if once:
            asyncio.run(_run_once(config))
        else:
            asyncio.run(_run_scheduler(config))
    except ConfigError as exc:
        logger.error("config_invalid", error=str(exc))
        raise typer.Exit(code=1) from exc


@app.command()
def resolve(url: str) -> None:
    try:
        repository = resolve_url(url)
    except UnrecognizedURLError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"{feed_key(repository.project)} {repository.feed_url}")


async def _run_once(config_path: Path) -> None:
    async with create_application(config_path) as components:
        await register_configured_feeds(components)
        await components.watcher.poll_all()


async def _run_scheduler(config_path: Path) -> None:
    async with create_application(config_path) as components:
        await register_configured_feeds(components)
        await components.scheduler.start()
        logger.info("scheduler_started", jobs=len(components.scheduler.job_ids))
        try:
            await asyncio.Event().wait()
        finally:
            await components.scheduler.shutdown()


if __name__ == "__main__":
    app()
