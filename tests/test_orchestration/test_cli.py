"""
Tests for the command-line entry point: flag handling and exit codes.
"""

from unittest.mock import patch

import pytest

from token_merge import cli
from token_merge.orchestration.workflow import WorkflowResult, WorkflowStatus

pytestmark = pytest.mark.smoke


@pytest.fixture(autouse=True)
def quiet_logging():
    with patch.object(cli, "setup_logging"):
        yield


def test_parser_flags():
    args = cli.build_parser().parse_args(
        ["--assets-dir", "frag", "--baseline", "base.json", "--output", "o.json"]
    )

    assert (args.assets_dir, args.baseline, args.output) == ("frag", "base.json", "o.json")
    assert args.split_on_first_underscore is None


def test_missing_credential_exits_non_zero(tmp_path, monkeypatch):
    monkeypatch.delenv("INPUT_COINGECKO_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)

    code = cli.main(
        ["--config", str(tmp_path / "none.yaml"), "--baseline", str(tmp_path / "b.json")]
    )

    assert code == 1


def test_flags_reach_workflow_settings(tmp_path):
    captured = {}

    class StubWorkflow:
        def __init__(self, settings, context):
            captured["settings"] = settings

        async def execute(self):
            return WorkflowResult(status=WorkflowStatus.SUCCESS)

    with patch.object(cli, "MergeWorkflow", StubWorkflow):
        code = cli.main(
            [
                "--config",
                str(tmp_path / "none.yaml"),
                "--assets-dir",
                "frag",
                "--output",
                "o.json",
                "--split-on-first-underscore",
            ]
        )

    settings = captured["settings"]
    assert code == 0
    assert settings.paths.assets_dir == "frag"
    assert settings.paths.output_path == "o.json"
    assert settings.aggregation.split_on_first_underscore is True
