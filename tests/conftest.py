"""Shared pytest fixtures and test helpers for reqctl tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from reqctl.config.settings import ReqSettings
from reqctl.domain.models import Project
from reqctl.services.telemetry import _current_span, disable_telemetry

SAMPLE_YAML = """\
name: Sample
version: 1.2.3
description: |
  A sample catalogue.
topics:
  T1:
    name: Transport
    requirements:
      REQ-1:
        name: Respond Quickly
        description: The service must respond within one second.
        additional_info:
          - Measured at the load balancer
      REQ-2:
        name: Retry
        description: Clients should retry failed calls.
    subtopics:
      T1.1:
        name: Encryption
        requirements:
          REQ-3:
            name: TLS
            description: Connections must use TLS.
  T2:
    name: Notes
    requirements:
      NOTE-1:
        name: Informal
        description: Not a checked requirement.
"""


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep host config and leftover telemetry state out of every test."""
    monkeypatch.delenv("REQCTL_CONFIG", raising=False)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory with a sample requirements file.

    The CWD is switched to it so config discovery stays inside the test.
    """
    (tmp_path / "requirements.yml").write_text(SAMPLE_YAML, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def requirements_file(project_root: Path) -> Path:
    return project_root / "requirements.yml"


@pytest.fixture
def settings(project_root: Path) -> ReqSettings:
    return ReqSettings.from_cli(project_root=project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_project(topics: dict[str, Any] | None = None, **fields: Any) -> Project:
    """Build a Project from plain data, filling in required root fields."""
    data: dict[str, Any] = {
        "name": "Test",
        "version": "1.0.0",
        "description": "Test project",
        "topics": topics or {},
    }
    data.update(fields)
    return Project.model_validate(data)


def requirement(name: str = "Req", description: str = "Desc", **fields: Any) -> dict[str, Any]:
    return {"name": name, "description": description, **fields}


def write_text(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path
