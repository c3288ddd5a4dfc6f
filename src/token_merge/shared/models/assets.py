# token_merge/shared/models/assets.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

TOKEN_SYMBOL_FIELD = "TokenSymbol"
COINGECKO_ID_FIELD = "Coingecko API ID"


class AssetItem(BaseModel):
    """
    One price identifier and the on-chain tokens that map to it.

    Serialized with the wire names ``Symbol``, ``HistorySlug`` and ``quote``.
    Only ``HistorySlug`` is required. Baseline entries are written back as
    they were read: extra keys are kept, absent fields stay absent and
    values are not coerced.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    symbol: Any = Field(default=None, alias="Symbol")
    history_slug: str = Field(..., alias="HistorySlug")
    quote: Any = None

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire field names, ready for json.dumps."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class RawTokenRecord(BaseModel):
    """
    One record from a per-network fragment file.

    ``TokenSymbol`` and ``Coingecko API ID`` are required and non-empty;
    ``TokenID`` and ``Network`` are optional.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token_symbol: str = Field(..., alias=TOKEN_SYMBOL_FIELD)
    coingecko_id: str = Field(..., alias=COINGECKO_ID_FIELD)
    token_id: str = Field(default="", alias="TokenID")
    network: str = Field(default="", alias="Network")

    @field_validator("token_symbol", "coingecko_id", "token_id", "network", mode="before")
    @classmethod
    def stringify(cls, v):
        """Accept numbers for identifiers; None renders as empty."""
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def quote_entry(self) -> str:
        return f"{self.token_id}:{self.network}"


class RecordParseResult(BaseModel):
    """Outcome of validating a single fragment record: a record or a skip reason."""

    record: RawTokenRecord | None = None
    skip_reason: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.record is not None


def parse_raw_record(data: Any) -> RecordParseResult:
    """Validate one decoded JSON value as a fragment record."""
    if not isinstance(data, dict):
        return RecordParseResult(
            skip_reason=f"record is {type(data).__name__}, expected object"
        )

    for required in (TOKEN_SYMBOL_FIELD, COINGECKO_ID_FIELD):
        if not data.get(required):
            return RecordParseResult(skip_reason=f"missing {required}")

    try:
        return RecordParseResult(record=RawTokenRecord.model_validate(data))
    except ValidationError as e:
        return RecordParseResult(skip_reason=f"invalid record: {e.errors()[0]['msg']}")
