"""ComplianceService — check test-result files against a requirement catalogue.

All inputs are validated and read before the report is built: an invalid
pattern, an unparseable catalogue, or any unreadable test-result file fails
the whole operation and no partial report is produced.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from reqctl.domain.compliance import InvalidPatternError, build_report, compile_patterns
from reqctl.services.base import BaseService, project_summary
from reqctl.services.result import INVALID_PATTERN, READ_ERROR, ServiceResult
from reqctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class ComplianceService(BaseService):
    """Build pass/fail/unknown compliance reports."""

    @traced
    def check(
        self,
        path: Path,
        test_results: Sequence[Path],
        *,
        allowed_requirements: Sequence[str] | None = None,
    ) -> ServiceResult:
        """Check the requirements in *path* against *test_results*, read in order.

        *allowed_requirements* defaults to ``[check] allowed_requirements``.
        """
        raw_patterns = list(allowed_requirements or self._settings.check.allowed_requirements)
        try:
            patterns = compile_patterns(raw_patterns)
        except InvalidPatternError as exc:
            return ServiceResult.failure(
                "check", INVALID_PATTERN, str(exc), pattern=exc.pattern, reason=exc.reason
            )

        loaded = self._load_project("check", path)
        if isinstance(loaded, ServiceResult):
            return loaded

        texts: list[str] = []
        with trace_span("read_test_results") as span:
            for result_path in test_results:
                try:
                    texts.append(result_path.read_text(encoding="utf-8"))
                except (OSError, UnicodeDecodeError) as exc:
                    logger.debug("Cannot read test results %s", result_path, exc_info=True)
                    return ServiceResult.failure(
                        "check",
                        READ_ERROR,
                        f"Cannot read test results {result_path}: {exc}",
                        path=str(result_path),
                    )
            if span is not None:
                span.annotate("files", len(texts))

        with trace_span("build_report"):
            report = build_report(loaded, patterns, texts)
        logger.debug("Compliance counts for %s: %s", path, report.counts())

        req_ids = [req_id for _, _, topic in loaded.iter_topics() for req_id in topic.requirements]
        warnings = [
            f"Pattern '{raw}' matches no requirement in {path}"
            for raw, pattern in zip(raw_patterns, patterns, strict=True)
            if not any(pattern.search(req_id) for req_id in req_ids)
        ]

        return ServiceResult(
            ok=True,
            op="check",
            warnings=warnings,
            data={
                "path": str(path),
                **project_summary(loaded),
                "patterns": raw_patterns,
                "test_results": [str(p) for p in test_results],
                **report.counts(),
                "content": report.text,
            },
        )
