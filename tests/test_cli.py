"""Mini README: Tests for the ``plan`` CLI command."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from main_survey_centre import cli

runner = CliRunner()


def test_plan_prints_result_json(tmp_path) -> None:
    trees = tmp_path / "trees.json"
    trees.write_text(json.dumps([{"x": 2, "y": 1, "height": 5}]))

    result = runner.invoke(cli, ["plan", "--width", "2", "--length", "2", "--trees", str(trees)])
    assert result.exit_code == 0
    assert json.loads(result.stdout.strip().splitlines()[-1]) == {"distance": 38}

    capped = runner.invoke(
        cli,
        ["plan", "--width", "2", "--length", "2", "--trees", str(trees), "--max-distance", "1"],
    )
    assert json.loads(capped.stdout.strip().splitlines()[-1]) == {
        "distance": 1,
        "rest": {"x": 1, "y": 1},
    }


def test_plan_rejects_bad_budget() -> None:
    result = runner.invoke(cli, ["plan", "--width", "1", "--length", "1", "--max-distance", "x"])
    assert result.exit_code == 1
