"""
Structured logging for token-merge.

Every entry carries the app name, the architectural layer and the component
that emitted it. Inside a GitHub Actions job the runner's ``GITHUB_RUN_ID`` is
added as ``run_id`` so lines can be matched to a workflow run.

Layers:
    - infrastructure: file system, CI run context
    - ingestion: CoinGecko client, retry helper
    - pipeline: merge workflow, CLI
    - processing: aggregation, merge, filtering
"""

import logging
import os
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

APP_NAME = "token-merge"

Layer = Literal["infrastructure", "ingestion", "pipeline", "processing"]


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["app"] = APP_NAME
    run_id = os.environ.get("GITHUB_RUN_ID")
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Copy the structlog level into an upper-case ``severity`` field."""
    level = event_dict.get("level")
    if level:
        event_dict["severity"] = level.upper()
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog on top of stdlib logging, writing to stdout.

    Args:
        level: Logging level name; unknown names fall back to INFO
        json_logs: One JSON object per line when True, console format otherwise
        include_timestamp: Prepend an ISO timestamp to each entry
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        # runner logs are not a terminal
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(layer: Layer, component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """
    Get a logger bound to a layer and component.

    Usage:
        >>> log = get_logger("processing", "merger")
        >>> log.info("asset_lists_merged", merged=42)
    """
    return structlog.get_logger(layer).bind(layer=layer, component=component, **context)


def get_infrastructure_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    return get_logger("infrastructure", component, **context)


def get_ingestion_logger(
    component: str, provider: str = "coingecko"
) -> structlog.stdlib.BoundLogger:
    """Ingestion loggers always name the remote API they talk to."""
    return get_logger("ingestion", component, provider=provider)


def get_pipeline_logger(component: str = "merge-workflow") -> structlog.stdlib.BoundLogger:
    return get_logger("pipeline", component)


def get_processing_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    return get_logger("processing", component, **context)
