"""AppContext: the object every command receives through ``@click.pass_obj``.

It owns the resolved settings and decides where results go.  Documents and
summaries go to stdout; errors and warnings go to stderr; a failed result
exits with status 1.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from reqctl.config.logging import configure_logging
from reqctl.output.formatters import OutputSettings, format_result
from reqctl.services.result import WRITE_ERROR, ServiceResult
from reqctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from reqctl.config.settings import ReqSettings


class AppContext:
    def __init__(self, settings: ReqSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* as a summary (or JSON); exit 1 if it failed."""
        text = format_result(result, settings=self.output_settings)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        self._warn(result)

    def emit_document(self, result: ServiceResult, output_file: str | None = None) -> None:
        """Print the document in ``data["content"]``, or save it to *output_file*.

        Saving prints the summary (without the content) instead.  ``--json``
        without *output_file* and failed results go through :meth:`emit`.
        """
        if not result.ok or (self.settings.json_output and output_file is None):
            self.emit(result)
            return

        content = result.data["content"]
        if output_file is None:
            click.echo(content)
            self._warn(result)
            return

        try:
            Path(output_file).write_text(content + "\n", encoding="utf-8")
        except OSError as exc:
            self.emit(
                ServiceResult.failure(
                    result.op, WRITE_ERROR, f"Cannot write {output_file}: {exc}", path=output_file
                )
            )
            return

        summary = {key: value for key, value in result.data.items() if key != "content"}
        summary["output_file"] = output_file
        self.emit(result.model_copy(update={"data": summary}))

    def _warn(self, result: ServiceResult) -> None:
        # JSON output already carries the warnings list.
        if self.settings.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
