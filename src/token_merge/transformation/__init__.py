"""
Transformation layer: fragment aggregation, baseline merge and the
pricing-API filter pass.
"""

from token_merge.transformation.aggregator import (
    AggregationReport,
    aggregate_fragments,
)
from token_merge.transformation.merger import merge_asset_lists
from token_merge.transformation.validators import filter_recognized_assets

__all__ = [
    "AggregationReport",
    "aggregate_fragments",
    "filter_recognized_assets",
    "merge_asset_lists",
]
