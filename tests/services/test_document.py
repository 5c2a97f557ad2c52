"""Tests for DocumentService."""

from __future__ import annotations

from pathlib import Path

import pytest

from reqctl.config.settings import ReqSettings
from reqctl.domain.rendering import TOC_MARKER
from reqctl.services.document import DocumentService
from reqctl.services.result import PARSE_ERROR, READ_ERROR
from reqctl.services.telemetry import enable_telemetry
from tests.conftest import write_text


class TestRenderMarkdown:
    def test_success(self, settings: ReqSettings, requirements_file: Path) -> None:
        result = DocumentService(settings).render_markdown(requirements_file)
        assert result.ok
        assert result.op == "markdown"
        assert result.data["project"] == "Sample"
        assert result.data["version"] == "1.2.3"
        assert result.data["topic_count"] == 3
        assert result.data["requirement_count"] == 4
        content = result.data["content"]
        assert content.startswith("# Requirements for Sample")
        assert "- **_REQ-1_ - Respond Quickly:** The service **_MUST_** respond" in content
        assert "#### _T1.1_ - Encryption" in content

    def test_toc_default_from_settings(
        self, settings: ReqSettings, requirements_file: Path
    ) -> None:
        result = DocumentService(settings).render_markdown(requirements_file)
        assert TOC_MARKER in result.data["content"]

    def test_toc_disabled_by_config(self, project_root: Path, requirements_file: Path) -> None:
        write_text(project_root / "reqctl.toml", "[markdown]\ntoc = false\n")
        settings = ReqSettings.from_cli(project_root=project_root)
        result = DocumentService(settings).render_markdown(requirements_file)
        assert TOC_MARKER not in result.data["content"]

    def test_toc_argument_overrides(self, settings: ReqSettings, requirements_file: Path) -> None:
        result = DocumentService(settings).render_markdown(requirements_file, toc=False)
        assert TOC_MARKER not in result.data["content"]

    def test_missing_file(self, settings: ReqSettings, project_root: Path) -> None:
        result = DocumentService(settings).render_markdown(project_root / "missing.yml")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == READ_ERROR
        assert result.error.detail["path"].endswith("missing.yml")

    def test_unparseable_file(self, settings: ReqSettings, project_root: Path) -> None:
        path = write_text(project_root / "bad.yml", "just: [unclosed\n")
        result = DocumentService(settings).render_markdown(path)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == PARSE_ERROR
        assert set(result.error.detail["attempts"]) == {"yaml", "json", "toml"}

    def test_telemetry_meta(self, settings: ReqSettings, requirements_file: Path) -> None:
        enable_telemetry()
        result = DocumentService(settings).render_markdown(requirements_file)
        assert result.meta is not None
        span = result.meta["telemetry"]
        assert span["name"] == "DocumentService.render_markdown"
        assert [child["name"] for child in span["children"]] == ["load_project", "render"]


class TestRenderHtml:
    def test_success(self, settings: ReqSettings, requirements_file: Path) -> None:
        result = DocumentService(settings).render_html(requirements_file)
        assert result.ok
        assert result.op == "html"
        content = result.data["content"]
        assert content.startswith("<!doctype html>")
        assert "<title>Requirements for Sample</title>" in content
        assert "<h1>Requirements for Sample</h1>" in content
        assert "<strong><em>MUST</em></strong>" in content
        assert "<footer>Sample 1.2.3</footer>" in content

    def test_nested_bullets(self, settings: ReqSettings, requirements_file: Path) -> None:
        content = DocumentService(settings).render_html(requirements_file).data["content"]
        assert "<li>Measured at the load balancer</li>" in content
        assert content.count("<ul>") >= 2

    def test_no_toc_by_default(self, settings: ReqSettings, requirements_file: Path) -> None:
        content = DocumentService(settings).render_html(requirements_file).data["content"]
        assert 'class="toc"' not in content
        assert TOC_MARKER not in content

    def test_toc(self, settings: ReqSettings, requirements_file: Path) -> None:
        content = DocumentService(settings).render_html(requirements_file, toc=True).data["content"]
        assert 'class="toc"' in content
        assert "[TOC]" not in content
        assert TOC_MARKER not in content

    def test_title_from_config(self, project_root: Path, requirements_file: Path) -> None:
        write_text(project_root / "reqctl.toml", '[html]\ntitle = "Shop <Handbook>"\n')
        settings = ReqSettings.from_cli(project_root=project_root)
        content = DocumentService(settings).render_html(requirements_file).data["content"]
        assert "<title>Shop &lt;Handbook&gt;</title>" in content

    def test_template_override(self, settings: ReqSettings, requirements_file: Path) -> None:
        override = settings.project_root / ".reqctl" / "templates" / "html"
        override.mkdir(parents=True)
        write_text(override / "document.html.j2", "<body>{{ content | safe }}</body>")
        content = DocumentService(settings).render_html(requirements_file).data["content"]
        assert content.startswith("<body><h1>")

    def test_broken_template(self, settings: ReqSettings, requirements_file: Path) -> None:
        override = settings.project_root / ".reqctl" / "templates" / "html"
        override.mkdir(parents=True)
        write_text(override / "document.html.j2", "{% if %}")
        result = DocumentService(settings).render_html(requirements_file)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "RENDER_ERROR"

    @pytest.mark.parametrize("name", ["missing.yml", "missing.json"])
    def test_missing_file(self, settings: ReqSettings, project_root: Path, name: str) -> None:
        result = DocumentService(settings).render_html(project_root / name)
        assert not result.ok
        assert result.op == "html"
