"""
Tests for setup_logging() and the layer logger factories.

setup_logging() configures the whole logging pipeline; if it breaks, every
CI log line of a run breaks with it.
"""

import json
import logging
from io import StringIO

import pytest
import structlog

from token_merge.infrastructure.observability import (
    get_infrastructure_logger,
    get_ingestion_logger,
    get_pipeline_logger,
    get_processing_logger,
    setup_logging,
)


@pytest.fixture
def clean_logging():
    """
    Reset logging and structlog global state around each test.
    """
    original_handlers = logging.root.handlers[:]

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()

    yield

    logging.root.handlers = []
    logging.root.setLevel(logging.WARNING)
    structlog.reset_defaults()
    logging.root.handlers = original_handlers


@pytest.fixture
def captured(clean_logging):
    """Configure JSON logging and capture root handler output."""
    setup_logging(level="INFO", json_logs=True, include_timestamp=False)
    logging.root.setLevel(logging.INFO)

    output = StringIO()
    handler = logging.StreamHandler(output)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.root.addHandler(handler)

    def lines():
        handler.flush()
        return [json.loads(line) for line in output.getvalue().splitlines() if line.strip()]

    yield lines

    logging.root.removeHandler(handler)


class TestSetupLogging:
    def test_json_mode_adds_app_and_severity(self, captured):
        structlog.get_logger("test").info("json_test_event", value=123)

        entry = captured()[-1]
        assert entry["event"] == "json_test_event"
        assert entry["value"] == 123
        assert entry["app"] == "token-merge"
        assert entry["severity"] == "INFO"
        assert "timestamp" not in entry

    def test_timestamp_included_by_default(self, clean_logging):
        logging.root.handlers = []
        setup_logging(level="INFO", json_logs=True)
        logging.root.setLevel(logging.INFO)
        output = StringIO()
        handler = logging.StreamHandler(output)
        logging.root.addHandler(handler)

        try:
            structlog.get_logger("ts").info("with_timestamp")
            handler.flush()
            entry = json.loads(output.getvalue().strip().splitlines()[-1])
            assert "timestamp" in entry
        finally:
            logging.root.removeHandler(handler)

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR"])
    def test_root_level_follows_setting(self, clean_logging, level):
        logging.root.handlers = []
        setup_logging(level=level, json_logs=True)

        assert structlog.is_configured()
        assert logging.root.level == getattr(logging, level)

    def test_invalid_level_falls_back_to_info(self, clean_logging):
        logging.root.handlers = []
        setup_logging(level="NOT_A_LEVEL", json_logs=True)

        assert logging.root.level == logging.INFO

    def test_console_mode_configures(self, clean_logging):
        logging.root.handlers = []
        setup_logging(level="INFO", json_logs=False)

        assert structlog.is_configured()


class TestLayerLoggers:
    def test_processing_logger_binds_layer_and_component(self, captured):
        get_processing_logger("aggregator", directory="./assets").info("fragments_aggregated")

        entry = captured()[-1]
        assert entry["layer"] == "processing"
        assert entry["component"] == "aggregator"
        assert entry["directory"] == "./assets"

    def test_ingestion_logger_includes_provider(self, captured):
        get_ingestion_logger("coingecko-client", provider="coingecko").warning("attempt_failed")

        entry = captured()[-1]
        assert entry["layer"] == "ingestion"
        assert entry["provider"] == "coingecko"
        assert entry["severity"] == "WARNING"

    def test_pipeline_logger_default_component(self, captured):
        get_pipeline_logger().info("workflow_started")

        assert captured()[-1]["component"] == "merge-workflow"

    def test_infrastructure_logger_binds_component(self, captured):
        get_infrastructure_logger("github-actions-context").error("run_failed")

        entry = captured()[-1]
        assert (entry["layer"], entry["component"]) == ("infrastructure", "github-actions-context")
        assert entry["severity"] == "ERROR"


class TestRunContext:
    def test_run_id_added_inside_actions(self, captured, monkeypatch):
        monkeypatch.setenv("GITHUB_RUN_ID", "4242")

        get_pipeline_logger().info("workflow_started")

        assert captured()[-1]["run_id"] == "4242"

    def test_no_run_id_outside_actions(self, captured, monkeypatch):
        monkeypatch.delenv("GITHUB_RUN_ID", raising=False)

        get_pipeline_logger().info("workflow_started")

        assert "run_id" not in captured()[-1]
