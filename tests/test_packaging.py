from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _project():
    with open(PYPROJECT, "rb") as handle:
        return tomllib.load(handle)["project"]


def test_requests_is_only_an_e2e_extra():
    project = _project()

    assert not any(dep.startswith("requests") for dep in project["dependencies"])
    assert any(dep.startswith("requests") for dep in project["optional-dependencies"]["e2e"])
