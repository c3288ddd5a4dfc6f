"""
Fragment aggregation.

Scans a directory of per-network JSON fragments and groups their token
records into AssetItem entries keyed on symbol + CoinGecko id.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

from token_merge.infrastructure.impls.system import OsFileSystem
from token_merge.infrastructure.observability import get_processing_logger
from token_merge.infrastructure.ports.system import IFileSystem
from token_merge.shared.models import AssetItem, RawTokenRecord, parse_raw_record

KEY_SEPARATOR = "_"
TEMPLATE_FILE = "template.json"


@dataclass
class AggregationReport:
    """Summary of one aggregation pass."""

    items: list[AssetItem] = field(default_factory=list)
    files_read: int = 0
    failed_files: dict[str, str] = field(default_factory=dict)
    records_accepted: int = 0
    records_skipped: int = 0


def union_key(record: RawTokenRecord) -> str:
    return f"{record.token_symbol}{KEY_SEPARATOR}{record.coingecko_id}"


def split_union_key(key: str) -> tuple[str, str]:
    """Decompose a group key the historical way.

    Splits on every separator and keeps segments 0 and 1, so an underscore
    inside the symbol or the id truncates the result.
    """
    parts = key.split(KEY_SEPARATOR)
    return parts[0], parts[1]


def _is_fragment(path: Path, template_name: str) -> bool:
    return path.name != template_name and path.suffix.lower() == ".json"


def _load_records(content: str) -> list:
    data = json.loads(content)
    if not isinstance(data, list):
        data = [data]
    return data


def aggregate_fragments(
    directory: str | Path,
    fs: IFileSystem | None = None,
    template_name: str = TEMPLATE_FILE,
    split_on_first_underscore: bool = False,
) -> AggregationReport:
    """Build aggregated asset entries from every fragment file in ``directory``.

    Files are visited in name order and records in file order; a group's
    ``quote`` keeps that encounter order. Files that fail to read or parse
    are logged, recorded in the report and skipped.

    Args:
        directory: Directory holding ``*.json`` fragments
        fs: File system implementation (defaults to the OS)
        template_name: File name to ignore
        split_on_first_underscore: Use the record's own symbol and id for
            ``Symbol``/``HistorySlug`` instead of re-splitting the group key
    """
    fs = fs or OsFileSystem()
    directory = Path(directory)
    log = get_processing_logger("aggregator", directory=str(directory))
    report = AggregationReport()

    if not fs.exists(directory):
        log.warning("fragment_directory_missing")
        return report

    groups: dict[object, list[RawTokenRecord]] = {}

    for path in fs.list_files(directory):
        if not _is_fragment(path, template_name):
            continue

        try:
            raw_records = _load_records(fs.read_text(path))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            report.failed_files[path.name] = str(e)
            log.error("fragment_parse_failed", file=path.name, error=str(e))
            continue

        report.files_read += 1
        for raw in raw_records:
            result = parse_raw_record(raw)
            if not result.is_valid:
                report.records_skipped += 1
                log.debug("record_skipped", file=path.name, reason=result.skip_reason)
                continue

            record = result.record
            key = (
                (record.token_symbol, record.coingecko_id)
                if split_on_first_underscore
                else union_key(record)
            )
            groups.setdefault(key, []).append(record)
            report.records_accepted += 1

    for key, records in groups.items():
        if split_on_first_underscore:
            symbol, history_slug = key
        else:
            symbol, history_slug = split_union_key(key)
        report.items.append(
            AssetItem(
                symbol=symbol,
                history_slug=history_slug,
                quote=[r.quote_entry for r in records],
            )
        )

    log.info(
        "fragments_aggregated",
        files=report.files_read,
        failed_files=len(report.failed_files),
        records=report.records_accepted,
        skipped=report.records_skipped,
        assets=len(report.items),
    )
    return report
