"""Configuration value objects for dependency injection.

Instead of injecting the whole ConfigState, inject the specific dataclasses
each component needs. Built once at the composition root.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 60.0


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 10.0
    backoff_multiplier: float = 2.0
    jitter: bool = False


@dataclass(frozen=True)
class CoingeckoConfig:
    """Configuration for CoinGecko API client."""

    base_url: str
    api_key: str
    vs_currency: str = "USD"
    api_key_header: str = "x-cg-pro-api-key"
    http_config: HttpClientConfig = None
    retry_config: RetryConfig = None

    def __post_init__(self):
        """Set defaults for nested configs."""
        if self.http_config is None:
            object.__setattr__(self, "http_config", HttpClientConfig())
        if self.retry_config is None:
            object.__setattr__(self, "retry_config", RetryConfig())

    @classmethod
    def from_settings(cls, settings, api_key: str) -> "CoingeckoConfig":
        """Build from the ``coingecko`` section of ConfigState."""
        return cls(
            base_url=settings.base_url,
            api_key=api_key,
            vs_currency=settings.vs_currency,
            api_key_header=settings.api_key_header,
            http_config=HttpClientConfig(timeout=settings.timeout),
            retry_config=RetryConfig(
                max_attempts=settings.max_attempts,
                base_delay=settings.base_delay,
                max_delay=settings.max_delay,
                backoff_multiplier=settings.backoff_multiplier,
                jitter=settings.jitter,
            ),
        )
