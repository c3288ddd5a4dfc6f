"""
Pricing-API validation of merged assets.

Drops entries whose HistorySlug CoinGecko does not recognize. When the
lookup cannot be completed the list passes through unfiltered.
"""

from token_merge.exceptions import RetryExhaustedError
from token_merge.infrastructure.observability import get_processing_logger
from token_merge.infrastructure.ports.system import IRunContext
from token_merge.ingestion.adapters.coingecko import CoingeckoClient
from token_merge.shared.models import AssetItem


async def filter_recognized_assets(
    items: list[AssetItem],
    client: CoingeckoClient,
    context: IRunContext,
) -> list[AssetItem]:
    """Keep the items whose ``HistorySlug`` the pricing API returns.

    Returns ``items`` unchanged when there is nothing to look up or when
    every lookup attempt failed. Relative order is preserved.
    """
    log = get_processing_logger("coingecko-filter")
    ids = [item.history_slug for item in items]
    if not ids:
        log.info("filter_skipped", reason="no candidate ids")
        return items

    context.log_info(f"Checking coingecko token: {client.describe_request(ids)}")

    try:
        valid_ids = await client.fetch_market_ids(ids)
    except RetryExhaustedError as e:
        context.log_error(f"Failed to fetch coingecko data: {e}")
        context.log_warning("Returning original data without filtering due to fetch error")
        return items

    kept: list[AssetItem] = []
    for item in items:
        if item.history_slug in valid_ids:
            kept.append(item)
        else:
            context.log_info(f"Filtered tokenid: {item.history_slug}")

    log.info("assets_filtered", candidates=len(items), kept=len(kept))
    return kept
