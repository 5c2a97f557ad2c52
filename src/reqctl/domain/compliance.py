"""Compliance checking of requirement ids against test-result text.

A requirement is *in scope* when any allowed pattern matches (``re.search``)
its id.  Test results are plain texts scanned for two markers::

    <id>: failed - <error message>
    <id>: passed

Status aggregation across several texts is deliberately asymmetric: a failure
always replaces whatever was recorded before (including the messages of an
earlier failure), while a pass is only recorded when nothing is known yet.
Error messages therefore never accumulate across texts; only the last failing
text's messages survive.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from reqctl.domain.models import Project, Requirement, Topic
from reqctl.domain.rendering import topic_heading

DEFAULT_PATTERN = "REQ-.*"
CHECK_BASE_LEVEL = 2

PASSED_MARKER = ":white_check_mark:"
FAILED_MARKER = ":x:"
UNKNOWN_MARKER = ":warning:"

PatternLike = str | re.Pattern[str]


class InvalidPatternError(ValueError):
    """Raised when an allowed-requirement pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid requirement pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


@dataclass(frozen=True)
class RequirementStatus:
    """Outcome recorded for one requirement id."""

    passed: bool
    errors: tuple[str, ...] = ()


@dataclass
class ComplianceReport:
    """Report lines plus tallies over the in-scope requirements that were listed."""

    lines: list[str] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    unknown: int = 0
    out_of_scope: int = 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def counts(self) -> dict[str, int]:
        return {
            "passed": self.passed,
            "failed": self.failed,
            "unknown": self.unknown,
            "out_of_scope": self.out_of_scope,
        }


def compile_patterns(patterns: Iterable[PatternLike]) -> list[re.Pattern[str]]:
    """Compile every pattern, raising InvalidPatternError on the first bad one."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise InvalidPatternError(pattern, str(exc)) from exc
    return compiled


def is_in_scope(req_id: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    return any(pattern.search(req_id) for pattern in patterns)


def has_matching_requirement(topic: Topic, patterns: Sequence[re.Pattern[str]]) -> bool:
    """True when the topic or any subtopic below it holds an in-scope requirement."""
    if any(is_in_scope(req_id, patterns) for req_id in topic.requirements):
        return True
    return any(has_matching_requirement(sub, patterns) for sub in topic.subtopics.values())


def failure_messages(text: str, marker: str) -> list[str]:
    """Error messages from lines starting with *marker*.

    The message is whatever follows the first ``-`` after the marker.
    Lines without a ``-`` contribute nothing.
    """
    messages: list[str] = []
    for line in text.splitlines():
        if not line.startswith(marker):
            continue
        _, sep, message = line[len(marker) :].partition("-")
        if sep:
            messages.append(message.strip())
    return messages


def collect_statuses(
    requirements: dict[str, Requirement],
    test_results: Sequence[str],
    patterns: Sequence[re.Pattern[str]],
) -> dict[str, RequirementStatus]:
    """Scan *test_results* in order and return statuses keyed by trimmed id."""
    statuses: dict[str, RequirementStatus] = {}
    for text in test_results:
        for req_id in requirements:
            if not is_in_scope(req_id, patterns):
                continue
            key = req_id.strip()
            failed = f"{key}: failed"
            if failed in text:
                statuses[key] = RequirementStatus(False, tuple(failure_messages(text, failed)))
            elif f"{key}: passed" in text:
                statuses.setdefault(key, RequirementStatus(True))
    return statuses


def build_report(
    project: Project,
    allowed_patterns: Iterable[PatternLike],
    test_results: Iterable[str],
) -> ComplianceReport:
    """Check *project* against *test_results* and return the full report."""
    patterns = compile_patterns(allowed_patterns)
    results = list(test_results)
    report = ComplianceReport(lines=[f"# Test Results - {project.name.strip()}"])
    _check_topics(report, project.topics, patterns, results, CHECK_BASE_LEVEL)
    return report


def check(
    project: Project,
    allowed_patterns: Iterable[PatternLike],
    test_results: Iterable[str],
) -> list[str]:
    """Compliance report lines for *project*."""
    return build_report(project, allowed_patterns, test_results).lines


def status_marker(status: RequirementStatus | None) -> str:
    if status is None:
        return UNKNOWN_MARKER
    return PASSED_MARKER if status.passed else FAILED_MARKER


# ── Tree walk ─────────────────────────────────────────────────────────


def _check_topics(
    report: ComplianceReport,
    topics: dict[str, Topic],
    patterns: list[re.Pattern[str]],
    test_results: list[str],
    level: int,
) -> None:
    for topic_id, topic in topics.items():
        if not has_matching_requirement(topic, patterns):
            continue
        report.lines.append(topic_heading(level, topic_id, topic))

        if topic.requirements:
            statuses = collect_statuses(topic.requirements, test_results, patterns)
            for req_id, requirement in topic.requirements.items():
                status = statuses.get(req_id.strip())
                report.lines.append(
                    f"- _{req_id.strip()}_ - {requirement.name.strip()}: {status_marker(status)}"
                )
                if status is not None:
                    report.lines.extend(f"  - {error}" for error in status.errors)
                _tally(report, status, in_scope=is_in_scope(req_id, patterns))
            report.lines.append("")

        if topic.subtopics:
            _check_topics(report, topic.subtopics, patterns, test_results, level + 1)
            report.lines.append("")


def _tally(report: ComplianceReport, status: RequirementStatus | None, *, in_scope: bool) -> None:
    if not in_scope:
        report.out_of_scope += 1
    elif status is None:
        report.unknown += 1
    elif status.passed:
        report.passed += 1
    else:
        report.failed += 1
