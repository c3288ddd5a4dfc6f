#!/usr/bin/env python3
"""Command-line entry point for the CoinGecko token list merge."""

import argparse
import asyncio
import sys

from token_merge.config.state import get_config
from token_merge.infrastructure.impls.system import GithubActionsContext
from token_merge.infrastructure.observability import get_pipeline_logger, setup_logging
from token_merge.orchestration.workflow import MergeWorkflow


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="token-merge",
        description="Merge per-network token fragments with the baseline "
        "CoinGecko token list and drop ids CoinGecko does not know.",
    )
    parser.add_argument("--config", help="YAML config file (default: config/token_merge.yaml)")
    parser.add_argument("--assets-dir", help="Directory of fragment JSON files")
    parser.add_argument("--baseline", help="Baseline coingecko-token.json path")
    parser.add_argument("--output", help="Output JSON path")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument(
        "--pretty-logs",
        action="store_true",
        help="Human-readable console logs instead of JSON",
    )
    parser.add_argument(
        "--split-on-first-underscore",
        action="store_true",
        default=None,
        help="Keep TokenSymbol and CoinGecko id intact when they contain underscores",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_config(args.config)
    if args.assets_dir:
        settings.paths.assets_dir = args.assets_dir
    if args.baseline:
        settings.paths.baseline_path = args.baseline
    if args.output:
        settings.paths.output_path = args.output
    if args.log_level:
        settings.logging.level = args.log_level
    if args.pretty_logs:
        settings.logging.json_logs = False
    if args.split_on_first_underscore:
        settings.aggregation.split_on_first_underscore = True

    setup_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)

    context = GithubActionsContext()
    workflow = MergeWorkflow(settings, context)
    result = asyncio.run(workflow.execute())

    get_pipeline_logger("cli").info("run_complete", succeeded=result.succeeded)
    return 0 if result.succeeded and not context.failed else 1


if __name__ == "__main__":
    sys.exit(main())
