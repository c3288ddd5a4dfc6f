"""
Shared fixtures: in-memory CI run context, scripted HTTP client and
fragment/baseline writers.
"""

import json
from pathlib import Path

import pytest

from token_merge.infrastructure.ports.system import IRunContext
from token_merge.ingestion.config.value_objects import (
    CoingeckoConfig,
    HttpClientConfig,
    RetryConfig,
)
from token_merge.ingestion.ports.http import HttpResponse


class FakeRunContext(IRunContext):
    """Records everything the workflow tells the CI runner."""

    def __init__(self, inputs: dict[str, str] | None = None):
        self.inputs = inputs or {}
        self.outputs: dict[str, str] = {}
        self.failures: list[str] = []
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def get_input(self, name: str) -> str:
        return self.inputs.get(name, "")

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value

    def report_failure(self, message: str) -> None:
        self.failures.append(message)

    def log_info(self, message: str) -> None:
        self.infos.append(message)

    def log_warning(self, message: str) -> None:
        self.warnings.append(message)

    def log_error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def failed(self) -> bool:
        return bool(self.failures)


class ScriptedHttpClient:
    """IHttpClient double replaying a script of responses and exceptions.

    The last script entry repeats once the script runs out.
    """

    def __init__(self, script: list):
        self.script = list(script)
        self.calls: list[dict] = []
        self.closed = False

    async def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append(
            {"url": url, "params": params, "headers": headers, "timeout": timeout}
        )
        step = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(step, BaseException):
            raise step
        return step

    async def close(self) -> None:
        self.closed = True


def markets_response(*ids: str, status: int = 200) -> HttpResponse:
    return HttpResponse(
        status_code=status,
        body=[{"id": i, "symbol": i[:3], "current_price": 1.0} for i in ids],
        headers={"Content-Type": "application/json"},
        url="https://pro-api.coingecko.com/api/v3/coins/markets",
    )


def error_response(status: int) -> HttpResponse:
    return HttpResponse(
        status_code=status,
        body={"error": "unavailable"},
        headers={},
        url="https://pro-api.coingecko.com/api/v3/coins/markets",
    )


@pytest.fixture
def run_context():
    return FakeRunContext(inputs={"coingecko_token": "test-key"})


@pytest.fixture
def fast_coingecko_config():
    """CoinGecko config without real backoff delays."""
    return CoingeckoConfig(
        base_url="https://pro-api.coingecko.com/api/v3",
        api_key="test-key",
        http_config=HttpClientConfig(timeout=5.0),
        retry_config=RetryConfig(max_attempts=3, base_delay=0.0, max_delay=0.0),
    )


@pytest.fixture
def write_json():
    """Write a JSON document to a path, creating parent directories."""

    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def scripted_http():
    """Factory for ScriptedHttpClient."""
    return ScriptedHttpClient


@pytest.fixture
def markets():
    """Factory for successful /coins/markets responses."""
    return markets_response


@pytest.fixture
def http_error():
    """Factory for non-success responses."""
    return error_response


@pytest.fixture
def make_context():
    """Factory for FakeRunContext with custom inputs."""
    return FakeRunContext
