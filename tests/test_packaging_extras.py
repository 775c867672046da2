"""Tests for packaging metadata."""

from __future__ import annotations

import importlib
import tomllib
from pathlib import Path
from typing import Any, cast


def _load_pyproject() -> dict[str, Any]:
    path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _extras(pyproject: dict[str, Any]) -> dict[str, list[str]]:
    return cast(dict[str, list[str]], pyproject.get("project", {}).get("optional-dependencies", {}))


def test_runtime_dependencies() -> None:
    deps = " ".join(_load_pyproject()["project"]["dependencies"]).lower()
    for name in ("pydantic", "pyyaml", "typer", "reportlab"):
        assert name in deps


def test_optional_dependency_groups() -> None:
    extras = _extras(_load_pyproject())
    assert {"dev", "test"}.issubset(extras)
    assert any(req.startswith("pytest") for req in extras["test"])


def test_console_script_entrypoint() -> None:
    pyproject = _load_pyproject()
    scripts = pyproject.get("project", {}).get("scripts", {})
    assert scripts.get("billpress") == "billpress.cli:app"


def test_defaults_shipped_as_package_data() -> None:
    data = _load_pyproject()["tool"]["setuptools"]["package-data"]
    assert "defaults.yml" in data["billpress.config"]


def test_import_smoke() -> None:
    importlib.import_module("billpress")
    importlib.import_module("billpress.cli")
