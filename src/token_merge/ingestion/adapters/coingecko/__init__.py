"""CoinGecko pricing API adapter."""

from token_merge.ingestion.adapters.coingecko.client import CoingeckoClient

__all__ = ["CoingeckoClient"]
