from __future__ import annotations

import tomllib
from pathlib import Path

import transit_lab


def _load_project_table() -> dict[str, object]:
    pyproject_path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    pyproject = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    return pyproject["project"]


def test_package_version_matches_pyproject() -> None:
    project = _load_project_table()
    assert transit_lab.__version__ == project["version"]


def test_console_script_points_at_cli_main() -> None:
    project = _load_project_table()
    assert project["scripts"]["transit-lab"] == "transit_lab.cli.main_cli:main"
