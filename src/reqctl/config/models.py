"""Config file sections with code-baked defaults.

A config file is sparse: it only lists the values that differ from here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from reqctl.domain.compliance import DEFAULT_PATTERN


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    allowed_requirements: list[str] = Field(default_factory=lambda: [DEFAULT_PATTERN])


class MarkdownConfig(BaseModel):
    """[markdown] section."""

    model_config = {"frozen": True}

    toc: bool = True


class HtmlConfig(BaseModel):
    """[html] section.

    An empty ``title`` means "Requirements for <project name>".
    """

    model_config = {"frozen": True}

    toc: bool = False
    title: str = ""


class ReqConfig(BaseModel):
    """All sections of a config file.

    Used to validate a config table before it is merged into ReqSettings;
    top-level keys other than the sections are left to ReqSettings.
    """

    model_config = {"frozen": True}

    check: CheckConfig = Field(default_factory=CheckConfig)
    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    html: HtmlConfig = Field(default_factory=HtmlConfig)
