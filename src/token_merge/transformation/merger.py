"""Merge of the baseline asset list with freshly aggregated entries."""

from token_merge.infrastructure.observability import get_processing_logger
from token_merge.shared.models import AssetItem


def merge_key(item: AssetItem) -> str:
    return item.history_slug


def merge_asset_lists(
    baseline: list[AssetItem], aggregated: list[AssetItem]
) -> list[AssetItem]:
    """
    Union of two asset lists keyed on ``HistorySlug``.

    An aggregated entry replaces the baseline entry with the same key as a
    whole, including an empty ``quote``. Aggregated entries come first in
    their own order, followed by baseline-only entries in baseline order.
    Duplicate keys collapse to the first position with the last data seen.

    Args:
        baseline: Previously committed list
        aggregated: List computed from fragments in this run

    Returns:
        New list of copied items; inputs are left untouched
    """
    by_key: dict[str, AssetItem] = {}
    for item in baseline:
        by_key[merge_key(item)] = item
    for item in aggregated:
        by_key[merge_key(item)] = item

    result: list[AssetItem] = []
    emitted: set[str] = set()
    for item in [*aggregated, *baseline]:
        key = merge_key(item)
        if key in emitted:
            continue
        emitted.add(key)
        result.append(by_key[key].model_copy(deep=True))

    overridden = len({merge_key(i) for i in baseline} & {merge_key(i) for i in aggregated})
    get_processing_logger("merger").info(
        "asset_lists_merged",
        baseline=len(baseline),
        aggregated=len(aggregated),
        overridden=overridden,
        merged=len(result),
    )
    return result
