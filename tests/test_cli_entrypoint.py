from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("colony_advisor.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_recommend_command_reads_state_file(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from colony_advisor.main import app

    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "you": {"startingPlantation": "Indigo", "doubloons": 2},
                "opponent": {"startingPlantation": "Corn", "doubloons": 2},
                "roundState": {"availableRoles": ["Settler", "Prospector"], "faceUpPlantations": ["Corn"]},
                "turnNumber": 1,
            }
        ),
        encoding="utf-8",
    )

    result = typer_testing.CliRunner().invoke(app, ["recommend", str(path), "--limit", "2"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "recommendations" in result.stdout
    assert "Corn" in result.stdout


def test_recommend_command_reports_invalid_state(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from colony_advisor.main import app

    path = tmp_path / "state.json"
    path.write_text("[]", encoding="utf-8")

    result = typer_testing.CliRunner().invoke(app, ["recommend", str(path)], catch_exceptions=False)

    assert result.exit_code == 1
    assert "error" in result.stdout


def test_play_loop_runs_until_quit() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from colony_advisor.main import app

    result = typer_testing.CliRunner().invoke(app, ["play"], input="round Corn Sugar Coffee\nrecommend\nquit\n")

    assert result.exit_code == 0
    assert "stopped" in result.stdout


def test_catalog_command_lists_buildings() -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from colony_advisor.main import app

    result = typer_testing.CliRunner().invoke(app, ["catalog"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Small Market" in result.stdout
    assert "Guild Hall" in result.stdout
