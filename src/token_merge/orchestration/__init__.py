"""Orchestration of a merge run."""

from token_merge.orchestration.workflow import (
    MergeWorkflow,
    WorkflowResult,
    WorkflowStatus,
)

__all__ = ["MergeWorkflow", "WorkflowResult", "WorkflowStatus"]
