"""ProjectService — schema, demo data, and outline views of a catalogue."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from reqctl.domain.models import Project, Topic
from reqctl.infrastructure.parsing import demo_project, dump_yaml
from reqctl.services.base import BaseService, project_summary
from reqctl.services.result import ServiceResult
from reqctl.services.telemetry import traced


class ProjectService(BaseService):
    """Operations on the document format itself rather than a rendering of it."""

    @traced
    def schema(self) -> ServiceResult:
        """JSON schema of the requirement document format."""
        content = json.dumps(Project.json_schema(), indent=2)
        return ServiceResult(ok=True, op="schema", data={"content": content})

    @traced
    def demo(self) -> ServiceResult:
        """Demo requirement document in YAML, usable as a starting point."""
        project = demo_project()
        return ServiceResult(
            ok=True,
            op="demo",
            data={**project_summary(project), "content": dump_yaml(project.to_document())},
        )

    @traced
    def outline(self, path: Path) -> ServiceResult:
        """Nested topic/requirement ids and names of *path*."""
        loaded = self._load_project("outline", path)
        if isinstance(loaded, ServiceResult):
            return loaded
        return ServiceResult(
            ok=True,
            op="outline",
            data={
                "path": str(path),
                **project_summary(loaded),
                "topics": _outline_topics(loaded.topics),
            },
        )


def _outline_topics(topics: dict[str, Topic]) -> list[dict[str, Any]]:
    return [
        {
            "id": topic_id.strip(),
            "name": topic.name.strip(),
            "requirements": [
                {"id": req_id.strip(), "name": req.name.strip()}
                for req_id, req in topic.requirements.items()
            ],
            "subtopics": _outline_topics(topic.subtopics),
        }
        for topic_id, topic in topics.items()
    ]
