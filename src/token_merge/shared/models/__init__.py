from token_merge.shared.models.assets import (
    COINGECKO_ID_FIELD,
    TOKEN_SYMBOL_FIELD,
    AssetItem,
    RawTokenRecord,
    RecordParseResult,
    parse_raw_record,
)

__all__ = [
    "AssetItem",
    "COINGECKO_ID_FIELD",
    "RawTokenRecord",
    "RecordParseResult",
    "TOKEN_SYMBOL_FIELD",
    "parse_raw_record",
]
