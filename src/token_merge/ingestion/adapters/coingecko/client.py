from typing import Any

from token_merge.exceptions import HttpStatusError, ResponseFormatError
from token_merge.infrastructure.observability import get_ingestion_logger
from token_merge.ingestion.config.value_objects import CoingeckoConfig
from token_merge.ingestion.ports import IHttpClient
from token_merge.ingestion.retry_handler import retry_async

MARKETS_ENDPOINT = "coins/markets"


class CoingeckoClient:
    """Async client for the CoinGecko markets endpoint.

    Single Responsibility: turn a list of candidate identifiers into the set
    CoinGecko recognizes. Transport comes from the injected http_client;
    each call runs under the configured retry policy.
    """

    def __init__(self, config: CoingeckoConfig, http_client: IHttpClient):
        """Initialize CoingeckoClient with injected dependencies.

        Args:
            config: base_url, api key, currency, timeout and retry settings
            http_client: HTTP client implementation (e.g., AiohttpClient)
        """
        self.config = config
        self.http_client = http_client
        self.log = get_ingestion_logger("coingecko-client", provider="coingecko")

    @property
    def markets_url(self) -> str:
        return f"{self.config.base_url}/{MARKETS_ENDPOINT}"

    def _headers(self) -> dict[str, str]:
        return {
            self.config.api_key_header: self.config.api_key,
            "Content-Type": "application/json",
        }

    def _params(self, ids: list[str]) -> dict[str, str]:
        return {"vs_currency": self.config.vs_currency, "ids": ",".join(ids)}

    def describe_request(self, ids: list[str]) -> str:
        """Request URL as it would appear on the wire, without credentials."""
        params = self._params(ids)
        return f"{self.markets_url}?vs_currency={params['vs_currency']}&ids={params['ids']}"

    async def _fetch_markets_once(self, ids: list[str]) -> list[dict[str, Any]]:
        response = await self.http_client.get(
            self.markets_url,
            params=self._params(ids),
            headers=self._headers(),
            timeout=self.config.http_config.timeout,
        )

        if not response.ok:
            raise HttpStatusError(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
                endpoint=MARKETS_ENDPOINT,
            )

        body = response.body
        if not isinstance(body, list) or not all(isinstance(i, dict) for i in body):
            raise ResponseFormatError(
                f"Expected a JSON array of objects, got {type(body).__name__}",
                status_code=response.status_code,
                endpoint=MARKETS_ENDPOINT,
            )
        return body

    async def fetch_market_ids(self, ids: list[str]) -> set[str]:
        """Return the subset of ``ids`` CoinGecko knows about.

        Raises:
            RetryExhaustedError: When every attempt failed
        """
        markets = await retry_async(
            lambda: self._fetch_markets_once(ids),
            self.config.retry_config,
            self.log,
            description="fetch coingecko markets",
        )
        valid_ids = {item["id"] for item in markets if item.get("id")}
        self.log.info("markets_fetched", requested=len(ids), recognized=len(valid_ids))
        return valid_ids
