"""Configuration exports for token_merge."""

from token_merge.config.state import (
    AggregationConfig,
    CoingeckoSettings,
    ConfigLoader,
    ConfigState,
    LoggingConfig,
    PathsConfig,
    get_config,
)

__all__ = [
    "AggregationConfig",
    "CoingeckoSettings",
    "ConfigLoader",
    "ConfigState",
    "LoggingConfig",
    "PathsConfig",
    "get_config",
]
