"""DocumentService — Markdown and HTML documents from a requirement file."""

from __future__ import annotations

import logging
from pathlib import Path

import markdown

from reqctl.domain.rendering import TOC_MARKER, render
from reqctl.infrastructure.templates import build_template_environment
from reqctl.services.base import BaseService, project_summary
from reqctl.services.result import RENDER_ERROR, ServiceResult
from reqctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

HTML_TEMPLATE = "document.html.j2"
# Python-Markdown's own TOC placeholder (toc extension).
HTML_TOC_MARKER = "[TOC]"
_MARKDOWN_EXTENSIONS = ["tables", "fenced_code", "sane_lists"]


class DocumentService(BaseService):
    """Render requirement catalogues as documentation."""

    @traced
    def render_markdown(self, path: Path, *, toc: bool | None = None) -> ServiceResult:
        """Render *path* as Markdown.

        *toc* defaults to ``[markdown] toc`` from settings.
        """
        loaded = self._load_project("markdown", path)
        if isinstance(loaded, ServiceResult):
            return loaded

        use_toc = self._settings.markdown.toc if toc is None else toc
        with trace_span("render"):
            content = render(loaded, toc=use_toc)

        return ServiceResult(
            ok=True,
            op="markdown",
            data={"path": str(path), **project_summary(loaded), "content": content},
        )

    @traced
    def render_html(self, path: Path, *, toc: bool | None = None) -> ServiceResult:
        """Render *path* as a standalone HTML page.

        The Markdown rendering is converted with Python-Markdown and wrapped
        in the ``html/document.html.j2`` template, which a project may
        override under ``.reqctl/templates/html/``.
        """
        loaded = self._load_project("html", path)
        if isinstance(loaded, ServiceResult):
            return loaded

        use_toc = self._settings.html.toc if toc is None else toc
        extensions = [*_MARKDOWN_EXTENSIONS, "toc"] if use_toc else _MARKDOWN_EXTENSIONS
        title = self._settings.html.title or f"Requirements for {loaded.name.strip()}"

        with trace_span("render"):
            text = render(loaded, toc=use_toc).replace(TOC_MARKER, HTML_TOC_MARKER)
            try:
                # Nested bullets are indented by two spaces.
                body = markdown.markdown(text, extensions=extensions, tab_length=2)
                env = build_template_environment("html", project_root=self._settings.project_root)
                content = env.get_template(HTML_TEMPLATE).render(
                    title=title,
                    content=body,
                    project_name=loaded.name.strip(),
                    version=str(loaded.version),
                )
            except Exception as exc:
                logger.debug("HTML rendering failed for %s", path, exc_info=True)
                return ServiceResult.failure(
                    "html", RENDER_ERROR, f"HTML rendering failed: {exc}", path=str(path)
                )

        return ServiceResult(
            ok=True,
            op="html",
            data={"path": str(path), **project_summary(loaded), "content": content},
        )
