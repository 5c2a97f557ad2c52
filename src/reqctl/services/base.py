"""BaseService — shared foundation for reqctl services.

Every service receives the resolved :class:`ReqSettings` at construction
time and loads requirement documents through :meth:`_load_project`, which
maps read and parse failures onto structured ServiceResult errors.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from reqctl.infrastructure.parsing import ProjectParseError, load_project
from reqctl.services.result import PARSE_ERROR, READ_ERROR, ServiceResult
from reqctl.services.telemetry import trace_span

if TYPE_CHECKING:
    from reqctl.config.settings import ReqSettings
    from reqctl.domain.models import Project

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class DocumentService(BaseService):
            def render_markdown(self, path: Path) -> ServiceResult:
                loaded = self._load_project("markdown", path)
                if isinstance(loaded, ServiceResult):
                    return loaded
                ...
    """

    def __init__(self, settings: ReqSettings) -> None:
        self._settings = settings

    def _load_project(self, op: str, path: Path) -> Project | ServiceResult:
        """Load *path* into a Project, or return the failure result for *op*."""
        with trace_span("load_project") as span:
            try:
                project = load_project(path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.debug("Cannot read requirements %s", path, exc_info=True)
                return ServiceResult.failure(
                    op, READ_ERROR, f"Cannot read requirements file {path}: {exc}", path=str(path)
                )
            except ProjectParseError as exc:
                return ServiceResult.failure(
                    op, PARSE_ERROR, str(exc), path=str(path), attempts=exc.attempts
                )
            if span is not None:
                span.annotate("path", str(path))
                span.annotate("topics", len(project.topics))
        return project


def project_summary(project: Project) -> dict[str, object]:
    """Common payload fields describing a loaded project."""
    topics = list(project.iter_topics())
    return {
        "project": project.name.strip(),
        "version": str(project.version),
        "topic_count": len(topics),
        "requirement_count": sum(len(topic.requirements) for _, _, topic in topics),
    }
