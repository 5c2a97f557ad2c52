"""Tests for compliance checking against test-result text."""

from __future__ import annotations

import re

import pytest

from reqctl.domain.compliance import (
    FAILED_MARKER,
    PASSED_MARKER,
    UNKNOWN_MARKER,
    InvalidPatternError,
    RequirementStatus,
    build_report,
    check,
    collect_statuses,
    compile_patterns,
    failure_messages,
    has_matching_requirement,
    is_in_scope,
    status_marker,
)
from reqctl.domain.models import Topic
from tests.conftest import make_project, requirement

DEFAULT = [re.compile("REQ-.*")]


def _single(req_id: str = "REQ-1"):
    return make_project({"T1": {"name": "Topic", "requirements": {req_id: requirement("R")}}})


class TestPatterns:
    def test_compile(self) -> None:
        patterns = compile_patterns(["REQ-.*", re.compile("X")])
        assert [p.pattern for p in patterns] == ["REQ-.*", "X"]

    def test_invalid_pattern(self) -> None:
        with pytest.raises(InvalidPatternError) as exc_info:
            compile_patterns(["REQ-(", "ok"])
        assert exc_info.value.pattern == "REQ-("
        assert "REQ-(" in str(exc_info.value)

    def test_search_not_fullmatch(self) -> None:
        assert is_in_scope("XREQ-1", DEFAULT)
        assert is_in_scope("REQ-1", compile_patterns(["REQ"]))
        assert not is_in_scope("NOTE-1", DEFAULT)

    def test_any_pattern_matches(self) -> None:
        patterns = compile_patterns([r"REQ-2\..*", r"REQ-3\..*"])
        assert is_in_scope("REQ-3.1", patterns)
        assert not is_in_scope("REQ-1.1", patterns)

    def test_matching_requirement_in_deep_subtopic(self) -> None:
        topic = Topic.model_validate(
            {
                "name": "Outer",
                "subtopics": {
                    "A": {
                        "name": "A",
                        "subtopics": {"B": {"name": "B", "requirements": {"REQ-1": requirement()}}},
                    }
                },
            }
        )
        assert has_matching_requirement(topic, DEFAULT)
        assert not has_matching_requirement(topic, compile_patterns(["OTHER"]))

    def test_topic_id_alone_does_not_match(self) -> None:
        topic = Topic.model_validate(
            {"name": "REQ-topic", "requirements": {"NOTE-1": requirement()}}
        )
        assert not has_matching_requirement(topic, DEFAULT)


class TestFailureMessages:
    def test_text_after_first_dash(self) -> None:
        text = "REQ-1: failed - timeout - retrying\nother line\nREQ-1: failed -   second  "
        assert failure_messages(text, "REQ-1: failed") == ["timeout - retrying", "second"]

    def test_marker_must_start_line(self) -> None:
        assert failure_messages("  REQ-1: failed - indented", "REQ-1: failed") == []

    def test_line_without_dash(self) -> None:
        assert failure_messages("REQ-1: failed", "REQ-1: failed") == []


class TestCollectStatuses:
    def _requirements(self):
        return _single().topics["T1"].requirements

    def test_failure_after_pass(self) -> None:
        statuses = collect_statuses(
            self._requirements(), ["REQ-1: passed", "REQ-1: failed - boom"], DEFAULT
        )
        assert statuses == {"REQ-1": RequirementStatus(False, ("boom",))}

    def test_pass_after_failure(self) -> None:
        statuses = collect_statuses(
            self._requirements(), ["REQ-1: failed - boom", "REQ-1: passed"], DEFAULT
        )
        assert statuses == {"REQ-1": RequirementStatus(False, ("boom",))}

    def test_last_failing_text_wins(self) -> None:
        statuses = collect_statuses(
            self._requirements(),
            ["REQ-1: failed - first", "REQ-1: passed", "REQ-1: failed - second"],
            DEFAULT,
        )
        assert statuses["REQ-1"].errors == ("second",)

    def test_pass_recorded_once(self) -> None:
        texts = ["REQ-1: passed", "REQ-1: passed"]
        statuses = collect_statuses(self._requirements(), texts, DEFAULT)
        assert statuses == {"REQ-1": RequirementStatus(True)}

    def test_absent_id_has_no_status(self) -> None:
        assert collect_statuses(self._requirements(), ["REQ-2: passed"], DEFAULT) == {}

    def test_out_of_scope_ids_not_scanned(self) -> None:
        requirements = _single("NOTE-1").topics["T1"].requirements
        assert collect_statuses(requirements, ["NOTE-1: failed - x"], DEFAULT) == {}

    def test_keyed_by_trimmed_id(self) -> None:
        requirements = _single(" REQ-1 ").topics["T1"].requirements
        statuses = collect_statuses(requirements, ["REQ-1: passed"], DEFAULT)
        assert statuses == {"REQ-1": RequirementStatus(True)}


class TestStatusMarker:
    def test_markers(self) -> None:
        assert status_marker(RequirementStatus(True)) == PASSED_MARKER
        assert status_marker(RequirementStatus(False, ("x",))) == FAILED_MARKER
        assert status_marker(None) == UNKNOWN_MARKER


class TestCheck:
    def test_failed_example(self) -> None:
        lines = check(_single(), ["REQ-.*"], ["REQ-1: failed - timeout waiting for response"])
        assert lines == [
            "# Test Results - Test",
            "## _T1_ - Topic",
            "- _REQ-1_ - R: :x:",
            "  - timeout waiting for response",
            "",
        ]

    def test_passed_example(self) -> None:
        lines = check(_single(), ["REQ-.*"], ["REQ-1: passed"])
        assert lines[2] == "- _REQ-1_ - R: :white_check_mark:"

    def test_unknown_when_absent(self) -> None:
        lines = check(_single(), ["REQ-.*"], ["REQ-2: passed"])
        assert lines[2] == "- _REQ-1_ - R: :warning:"

    def test_no_test_results(self) -> None:
        assert check(_single(), ["REQ-.*"], [])[2] == "- _REQ-1_ - R: :warning:"

    def test_failure_dominates_either_order(self) -> None:
        a = "REQ-1: passed"
        b = "REQ-1: failed - from b"
        for texts in ([a, b], [b, a]):
            lines = check(_single(), ["REQ-.*"], texts)
            assert lines[2:4] == ["- _REQ-1_ - R: :x:", "  - from b"]

    def test_pruned_topics_emit_nothing(self) -> None:
        project = make_project(
            {
                "T1": {"name": "Kept", "requirements": {"REQ-1": requirement("R")}},
                "T2": {
                    "name": "Pruned",
                    "requirements": {"NOTE-1": requirement("N")},
                    "subtopics": {
                        "T2.1": {"name": "Also", "requirements": {"NOTE-2": requirement()}}
                    },
                },
            }
        )
        text = "\n".join(check(project, ["REQ-.*"], ["REQ-1: passed"]))
        assert "T2" not in text
        assert "NOTE" not in text

    def test_empty_parent_kept_for_matching_subtopic(self) -> None:
        project = make_project(
            {
                "T1": {
                    "name": "Parent",
                    "subtopics": {
                        "T1.1": {"name": "Child", "requirements": {"REQ-1": requirement("R")}},
                        "T1.2": {"name": "Other", "requirements": {"NOTE-1": requirement("N")}},
                    },
                }
            }
        )
        assert check(project, ["REQ-.*"], ["REQ-1: passed"]) == [
            "# Test Results - Test",
            "## _T1_ - Parent",
            "### _T1.1_ - Child",
            "- _REQ-1_ - R: :white_check_mark:",
            "",
            "",
        ]

    def test_requirements_listed_in_document_order(self) -> None:
        project = make_project(
            {
                "T1": {
                    "name": "Topic",
                    "requirements": {"REQ-2": requirement("Two"), "REQ-1": requirement("One")},
                }
            }
        )
        lines = check(project, ["REQ-.*"], ["REQ-1: passed\nREQ-2: failed - nope"])
        assert lines[2:5] == [
            "- _REQ-2_ - Two: :x:",
            "  - nope",
            "- _REQ-1_ - One: :white_check_mark:",
        ]

    def test_same_id_in_two_topics(self) -> None:
        project = make_project(
            {
                "A": {"name": "A", "requirements": {"REQ-1": requirement("First")}},
                "B": {"name": "B", "requirements": {"REQ-1": requirement("Second")}},
            }
        )
        lines = check(project, ["REQ-.*"], ["REQ-1: passed"])
        assert "- _REQ-1_ - First: :white_check_mark:" in lines
        assert "- _REQ-1_ - Second: :white_check_mark:" in lines

    def test_invalid_pattern_raises(self) -> None:
        with pytest.raises(InvalidPatternError):
            check(_single(), ["["], [])


class TestReport:
    def test_counts(self) -> None:
        project = make_project(
            {
                "T1": {
                    "name": "Topic",
                    "requirements": {
                        "REQ-1": requirement(),
                        "REQ-2": requirement(),
                        "REQ-3": requirement(),
                        "NOTE-1": requirement(),
                    },
                }
            }
        )
        report = build_report(project, ["REQ-.*"], ["REQ-1: passed\nREQ-2: failed - x"])
        assert report.counts() == {"passed": 1, "failed": 1, "unknown": 1, "out_of_scope": 1}

    def test_text_joins_lines(self) -> None:
        report = build_report(_single(), ["REQ-.*"], [])
        assert report.text == "\n".join(report.lines)

    def test_accepts_generators(self) -> None:
        report = build_report(_single(), (p for p in ["REQ-.*"]), (t for t in ["REQ-1: passed"]))
        assert report.passed == 1
