from __future__ import annotations

import os
import tomllib
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from .errors import ConfigError
from .models import AppConfig

if TYPE_CHECKING:
    from pathlib import Path

WEBHOOK_ENV_VAR = "SLACK_WEBHOOK_URL"


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    webhook_url = os.environ.get(WEBHOOK_ENV_VAR)
    networks = data.get("networks")
    if not webhook_url or not isinstance(networks, dict):
        return data
    overridden = {
        name: {**network, "webhook_url": webhook_url} if isinstance(network, dict) else network for name, network in networks.items()
    }
    return {**data, "networks": overridden}


def load_config(path: Path) -> AppConfig:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        msg = f"config not found: {path}"
        raise ConfigError(msg) from exc
    except tomllib.TOMLDecodeError as exc:
        msg = "toml parse error"
        raise ConfigError(msg) from exc

    try:
        return AppConfig.from_raw(_apply_env_overrides(data))
    except ValidationError as exc:
        msg = f"invalid config: {path}"
        raise ConfigError(msg) from exc
