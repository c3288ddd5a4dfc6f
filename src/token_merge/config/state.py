"""
Unified configuration state for a token-merge run.

Combines hardcoded defaults, an optional YAML file and environment overrides
into one validated ConfigState. The CLI applies its own flags on top.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config/token_merge.yaml"


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class PathsConfig(BaseModel):
    """Input and output locations, relative to the working directory."""

    assets_dir: str = Field(default="./assets")
    baseline_path: str = Field(
        default="./kubernetes-manifests/subscan/networks/coingecko-token.json"
    )
    output_path: str = Field(default="./combined_output_coingecko.json")
    template_name: str = Field(default="template.json")

    class Config:
        extra = "allow"


class AggregationConfig(BaseModel):
    """Fragment aggregation switches."""

    # False keeps the historical "split on every underscore" decomposition
    split_on_first_underscore: bool = Field(default=False)

    class Config:
        extra = "allow"


class CoingeckoSettings(BaseModel):
    """CoinGecko pricing API configuration."""

    base_url: str = Field(default="https://pro-api.coingecko.com/api/v3")
    vs_currency: str = Field(default="USD")
    api_key_header: str = Field(default="x-cg-pro-api-key")
    timeout: float = Field(default=60.0, gt=0)
    max_attempts: int = Field(default=3, ge=1, le=20)
    base_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=10.0, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1.0)
    jitter: bool = Field(default=False)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Strip trailing slash so endpoint joins stay predictable."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("CoinGecko base URL must start with http:// or https://")
        return v.rstrip("/")

    class Config:
        extra = "allow"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)

    class Config:
        extra = "allow"


class ConfigState(BaseModel):
    """
    Root configuration state - single source of truth for a run.
    """

    paths: PathsConfig = Field(default_factory=PathsConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    coingecko: CoingeckoSettings = Field(default_factory=CoingeckoSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        extra = "allow"


# =============================================================================
# CONFIG LOADER
# =============================================================================


class ConfigLoader:
    """
    Load and validate configuration.

    Merges:
      1. Global defaults (hardcoded in the models above)
      2. YAML file (optional)
      3. Environment variable overrides
    """

    def __init__(self, config_file: str | Path | None = None):
        self.config_file = Path(
            config_file or os.getenv("TOKEN_MERGE_CONFIG", DEFAULT_CONFIG_FILE)
        )

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load YAML file, empty dict when absent."""
        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        if assets_dir := os.getenv("TOKEN_MERGE_ASSETS_DIR"):
            config.setdefault("paths", {})["assets_dir"] = assets_dir

        if baseline_path := os.getenv("TOKEN_MERGE_BASELINE_PATH"):
            config.setdefault("paths", {})["baseline_path"] = baseline_path

        if output_path := os.getenv("TOKEN_MERGE_OUTPUT_PATH"):
            config.setdefault("paths", {})["output_path"] = output_path

        if base_url := os.getenv("COINGECKO_BASE_URL"):
            config.setdefault("coingecko", {})["base_url"] = base_url

        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Raises:
            pydantic.ValidationError: If configuration is invalid
        """
        config: dict[str, Any] = {}
        config = self._merge_dicts(config, self._load_yaml(self.config_file))
        config = self._apply_env_overrides(config)

        try:
            return ConfigState(**config)
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise


def get_config(config_file: str | Path | None = None) -> ConfigState:
    """Load and return the configuration state for this run."""
    return ConfigLoader(config_file=config_file).load()


__all__ = [
    "AggregationConfig",
    "CoingeckoSettings",
    "ConfigLoader",
    "ConfigState",
    "LoggingConfig",
    "PathsConfig",
    "get_config",
]
