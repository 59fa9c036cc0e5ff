"""Tests for CLI module."""

import json
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest

from testset_report.cli import format_output, run
from testset_report.display.base import SilentRenderer
from testset_report.models.config import ReportConfig
from testset_report.models.group import Group
from testset_report.models.outcome import Outcome, TimedOutcome

T0 = datetime(2024, 5, 1, 12, 0, 0)


def write_tree(tmp_path: Path, *kinds: str) -> Path:
    document = {
        "description": "root",
        "children": [
            {
                "type": "group",
                "description": "suite",
                "properties": {"env": "ci"},
                "children": [
                    {
                        "type": "group",
                        "description": "case",
                        "children": [
                            {"type": "outcome", "kind": kind, "duration": 0.25}
                            for kind in kinds
                        ],
                    }
                ],
            }
        ],
    }
    path = tmp_path / "results.json"
    path.write_text(json.dumps(document))
    return path


def test_format_output_empty() -> None:
    """Returns zero totals for a root without groups."""
    root = Group.reporting("root", now=T0)

    output = format_output(root)

    assert output["description"] == "root"
    assert output["start_time"] == "2024-05-01T12:00:00"
    assert output["total"] == 0
    assert output["groups"] == []


def test_format_output_mixed_results() -> None:
    """Formats groups and outcomes with correct totals."""
    suite = Group.reporting("suite", now=T0)
    suite.metadata.properties["env"] = "ci"  # type: ignore[union-attr]
    suite.children = [
        TimedOutcome(outcome=Outcome(kind="pass"), duration=timedelta(seconds=1)),
        TimedOutcome(
            outcome=Outcome(kind="fail", expression="x == 1", message="x is 2"),
            duration=timedelta(seconds=2),
        ),
        Outcome(kind="error"),
        Outcome(kind="broken"),
    ]
    root = Group.plain("root")
    root.children = [suite]

    output = format_output(root)

    assert output["total"] == 4
    assert output["passed"] == 1
    assert output["failed"] == 1
    assert output["errors"] == 1
    assert output["broken"] == 1
    assert output["properties"] == {}
    (group,) = output["groups"]
    assert group["description"] == "suite"
    assert group["properties"] == {"env": "ci"}
    assert group["results"][1] == {
        "kind": "fail",
        "duration": 2.0,
        "expression": "x == 1",
        "message": "x is 2",
        "source": None,
    }
    assert group["results"][2]["duration"] == 0.0


class TestRun:
    """Tests for run function."""

    def test_returns_one_when_tests_fail(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Returns the failure code and prints the flattened tree."""
        path = write_tree(tmp_path, "pass", "fail")

        with patch(
            "testset_report.cli.load_renderer", return_value=SilentRenderer()
        ) as mock_load:
            exit_code = run(path, "silent", ReportConfig())

        assert exit_code == 1
        mock_load.assert_called_once_with("silent")
        output = json.loads(capsys.readouterr().out)
        assert output["total"] == 2
        assert output["failed"] == 1
        (group,) = output["groups"]
        assert group["description"] == "suite/case"
        assert group["properties"] == {"env": "ci"}

    def test_returns_zero_when_all_tests_pass(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Returns the success code when nothing failed."""
        path = write_tree(tmp_path, "pass", "broken")

        with patch("testset_report.cli.load_renderer", return_value=SilentRenderer()):
            exit_code = run(path, "silent", ReportConfig())

        assert exit_code == 0
        assert '"total": 2' in capsys.readouterr().out

    def test_uses_configured_exit_code(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Exit codes come from the configuration."""
        path = write_tree(tmp_path, "error")

        with patch("testset_report.cli.load_renderer", return_value=SilentRenderer()):
            exit_code = run(path, "silent", ReportConfig(failure_exit_code=7))

        assert exit_code == 7
