"""
Merge Workflow
==============

Runs one token-list merge end to end:

1. Validate preconditions (credential supplied, baseline file present)
2. Aggregate fragment files
3. Merge with the baseline list
4. Filter through the CoinGecko lookup
5. Write the result and publish its path
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from token_merge.config.state import ConfigState
from token_merge.exceptions import (
    BaselineFormatError,
    BaselineNotFoundError,
    EmptyResultError,
    MissingCredentialError,
    TokenMergeError,
)
from token_merge.infrastructure.impls.system import OsFileSystem
from token_merge.infrastructure.observability import get_pipeline_logger
from token_merge.infrastructure.ports.system import IFileSystem, IRunContext
from token_merge.ingestion.adapters.coingecko import CoingeckoClient
from token_merge.ingestion.config.value_objects import CoingeckoConfig
from token_merge.ingestion.connectors.aiohttp_client import AiohttpClient
from token_merge.ingestion.ports import IHttpClient
from token_merge.shared.models import AssetItem
from token_merge.transformation import (
    aggregate_fragments,
    filter_recognized_assets,
    merge_asset_lists,
)

CREDENTIAL_INPUT = "coingecko_token"
OUTPUT_NAME = "json_filename"


class WorkflowStatus(str, Enum):
    """Workflow execution status."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class WorkflowResult:
    """Result of workflow execution."""

    status: WorkflowStatus
    duration_seconds: float = 0.0
    records_processed: int = 0
    records_written: int = 0
    output_path: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == WorkflowStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "duration_seconds": self.duration_seconds,
            "records_processed": self.records_processed,
            "records_written": self.records_written,
            "output_path": self.output_path,
            "errors": self.errors,
        }


def load_baseline(path: Path, fs: IFileSystem) -> list[AssetItem]:
    """Read the baseline list.

    Raises:
        BaselineFormatError: File is not a JSON array of asset entries
    """
    try:
        data = json.loads(fs.read_text(path))
    except ValueError as e:
        raise BaselineFormatError(f"Baseline {path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise BaselineFormatError(
            f"Baseline {path} must be a JSON array, got {type(data).__name__}"
        )

    try:
        return [AssetItem.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise BaselineFormatError(f"Baseline {path} has an invalid entry: {e}") from e


def dump_assets(items: list[AssetItem]) -> str:
    return json.dumps([item.to_wire() for item in items], indent=2, ensure_ascii=False)


class MergeWorkflow:
    """
    Coordinates a single merge run.

    Fatal conditions (missing credential or baseline, empty result) end the
    run through ``context.report_failure`` and no output file is written.
    Per-file parse errors and lookup failures are logged and tolerated.
    """

    def __init__(
        self,
        settings: ConfigState,
        context: IRunContext,
        fs: IFileSystem | None = None,
        http_client: IHttpClient | None = None,
    ):
        """
        Args:
            settings: Loaded configuration
            context: CI run context (inputs, outputs, failure flag)
            fs: File system implementation (defaults to the OS)
            http_client: HTTP transport; an AiohttpClient is created and
                closed per run when omitted
        """
        self.settings = settings
        self.context = context
        self.fs = fs or OsFileSystem()
        self.http_client = http_client
        self.log = get_pipeline_logger()
        self.status = WorkflowStatus.PENDING

    @property
    def baseline_path(self) -> Path:
        return Path(self.settings.paths.baseline_path)

    @property
    def output_path(self) -> Path:
        return Path(self.settings.paths.output_path)

    async def execute(self) -> WorkflowResult:
        """Execute the workflow with standard lifecycle."""
        start = datetime.now()
        self.status = WorkflowStatus.RUNNING
        self.log.info("workflow_started")

        try:
            credential = self.validate()
            result = await self._execute_impl(credential)
        except TokenMergeError as e:
            self.status = WorkflowStatus.FAILED
            self.context.report_failure(str(e))
            result = WorkflowResult(status=WorkflowStatus.FAILED, errors=[str(e)])
        except Exception as e:
            self.status = WorkflowStatus.FAILED
            self.log.exception("workflow_crashed")
            message = f"Workflow execution failed: {e}"
            self.context.report_failure(message)
            result = WorkflowResult(status=WorkflowStatus.FAILED, errors=[message])
        else:
            self.status = WorkflowStatus.SUCCESS

        result.duration_seconds = (datetime.now() - start).total_seconds()
        self.log.info("workflow_finished", **result.to_dict())
        return result

    def validate(self) -> str:
        """
        Check preconditions before any work is done.

        Returns:
            The API credential

        Raises:
            MissingCredentialError, BaselineNotFoundError
        """
        credential = self.context.get_input(CREDENTIAL_INPUT)
        if not credential:
            raise MissingCredentialError("Coingecko token is required")

        if not self.fs.exists(self.baseline_path):
            raise BaselineNotFoundError(str(self.baseline_path))

        return credential

    async def _execute_impl(self, credential: str) -> WorkflowResult:
        paths = self.settings.paths

        report = aggregate_fragments(
            paths.assets_dir,
            fs=self.fs,
            template_name=paths.template_name,
            split_on_first_underscore=self.settings.aggregation.split_on_first_underscore,
        )
        for file_name, error in report.failed_files.items():
            self.context.log_error(f"Error processing file {file_name}: {error}")

        baseline = load_baseline(self.baseline_path, self.fs)
        merged = merge_asset_lists(baseline, report.items)

        filtered = await self._filter(merged, credential)
        if not filtered:
            raise EmptyResultError("No coingecko token data found")

        self.fs.write_text(self.output_path, dump_assets(filtered))
        self.context.set_output(OUTPUT_NAME, str(paths.output_path))
        self.context.log_info(
            f"Combined JSON data has been written to {paths.output_path}"
        )

        return WorkflowResult(
            status=WorkflowStatus.SUCCESS,
            records_processed=len(merged),
            records_written=len(filtered),
            output_path=str(paths.output_path),
        )

    async def _filter(self, merged: list[AssetItem], credential: str) -> list[AssetItem]:
        config = CoingeckoConfig.from_settings(self.settings.coingecko, credential)

        if self.http_client is not None:
            client = CoingeckoClient(config, self.http_client)
            return await filter_recognized_assets(merged, client, self.context)

        async with AiohttpClient(config.http_config) as http_client:
            client = CoingeckoClient(config, http_client)
            return await filter_recognized_assets(merged, client, self.context)
