"""
Observability for token-merge: structured logging shared by every stage of a run.
"""

from .logging import (
    get_infrastructure_logger,
    get_ingestion_logger,
    get_logger,
    get_pipeline_logger,
    get_processing_logger,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_infrastructure_logger",
    "get_ingestion_logger",
    "get_pipeline_logger",
    "get_processing_logger",
]
