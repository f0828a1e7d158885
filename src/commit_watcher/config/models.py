from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from commit_watcher.feeds.models import DEFAULT_DESTINATION, Destination

if TYPE_CHECKING:
    from collections.abc import Mapping


def _is_valid_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


def _require_url(value: str) -> str:
    if not _is_valid_url(value):
        msg = "must be a valid URL"
        raise ValueError(msg)
    return value


class NetworkConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    webhook_url: str

    @field_validator("webhook_url")
    @classmethod
    def _validate_webhook_url(cls, value: str) -> str:
        return _require_url(value)


class DestinationConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    network: str = Field(min_length=1)
    channel: str = Field(min_length=1)

    def to_destination(self) -> Destination:
        return Destination(self.network, self.channel)


class FeedConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    url: str
    destinations: list[DestinationConfig] = Field(default_factory=list)

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _require_url(value)


class RepositoryConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str
    network: str | None = None
    channel: str | None = None

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _require_url(value)

    def destination(self, default: Destination) -> Destination | None:
        if self.network is None and self.channel is None:
            return None
        return Destination(self.network or default.network, self.channel or default.channel)


class AppConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    poll_interval_seconds: int = Field(default=300, gt=0)
    default_destination: DestinationConfig = DestinationConfig(
        network=DEFAULT_DESTINATION.network,
        channel=DEFAULT_DESTINATION.channel,
    )
    networks: dict[str, NetworkConfig]
    feeds: list[FeedConfig] = Field(default_factory=list)
    repositories: list[RepositoryConfig] = Field(default_factory=list)
    discovery_pages: list[str] = Field(default_factory=list)

    @field_validator("networks")
    @classmethod
    def _validate_networks(cls, value: dict[str, NetworkConfig]) -> dict[str, NetworkConfig]:
        if not value:
            msg = "must be non-empty"
            raise ValueError(msg)
        return value

    @field_validator("discovery_pages")
    @classmethod
    def _validate_discovery_pages(cls, value: list[str]) -> list[str]:
        return [_require_url(url) for url in value]

    @model_validator(mode="after")
    def _validate_destination_networks(self) -> AppConfig:
        default = self.default_destination.to_destination()
        destinations = [default]
        for feed in self.feeds:
            destinations.extend(d.to_destination() for d in feed.destinations)
        for repo in self.repositories:
            destination = repo.destination(default)
            if destination is not None:
                destinations.append(destination)
        for destination in destinations:
            if destination.network not in self.networks:
                msg = f"destination network {destination.network!r} is not configured"
                raise ValueError(msg)
        return self

    @property
    def webhooks(self) -> dict[str, str]:
        return {name: network.webhook_url for name, network in self.networks.items()}

    @classmethod
    def from_raw(cls, data: Mapping[str, object]) -> AppConfig:
        return cls.model_validate(data)
