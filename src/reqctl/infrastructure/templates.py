"""Jinja2 template loading with per-project override support."""

from __future__ import annotations

from pathlib import Path

from jinja2 import BaseLoader, ChoiceLoader, Environment, FileSystemLoader, PackageLoader

OVERRIDE_DIR = Path(".reqctl") / "templates"


def build_template_environment(group: str, *, project_root: Path | None = None) -> Environment:
    """Build a Jinja2 environment with project overrides before packaged defaults.

    Overrides live in ``.reqctl/templates/`` under the project root, either in
    a per-group directory (``.reqctl/templates/html/``) or flat in the root.
    HTML autoescaping is on for ``.html`` templates; pre-rendered markup is
    passed through with the ``safe`` filter.
    """

    loaders: list[BaseLoader] = []
    if project_root is not None:
        template_root = project_root / OVERRIDE_DIR
        loaders.append(FileSystemLoader([str(template_root / group), str(template_root)]))

    loaders.append(PackageLoader("reqctl", f"templates/{group}"))
    return Environment(
        loader=ChoiceLoader(loaders),
        keep_trailing_newline=True,
        autoescape=lambda name: name is not None and name.endswith((".html", ".html.j2")),
    )
