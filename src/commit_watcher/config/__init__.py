from .errors import ConfigError
from .loader import load_config
from .models import AppConfig, DestinationConfig, FeedConfig, NetworkConfig, RepositoryConfig

__all__ = [
    "AppConfig",
    "ConfigError",
    "DestinationConfig",
    "FeedConfig",
    "NetworkConfig",
    "RepositoryConfig",
    "load_config",
]
