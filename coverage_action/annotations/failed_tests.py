from __future__ import annotations

import os
import re

from coverage_action.domain.report import AssertionResult, Report

from .models import Annotation

_ANSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)|\x1b[@-Z\\-_]")


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def _line(assertion: AssertionResult) -> int | None:
    # annotations need a real 1-based line
    line = assertion.location.line
    return line if line > 0 else None


def create_failed_tests_annotations(report: Report, cwd: str | None = None) -> list[Annotation]:
    """One ``failure`` annotation per failed assertion that has a usable line."""
    if not report.test_results:
        return []

    base = cwd or os.getcwd()
    out: list[Annotation] = []

    for test_file in report.test_results:
        # a result without a file name cannot be pinned to a path
        if not test_file.name:
            continue
        path: str | None = None
        for a in test_file.assertion_results:
            if a.status != "failed":
                continue
            line = _line(a)
            if line is None:
                continue
            if path is None:
                path = os.path.relpath(test_file.name, base)
            out.append(
                Annotation(
                    annotation_level="failure",
                    path=path,
                    start_line=line,
                    end_line=line,
                    title=" > ".join([*a.ancestor_titles, a.title]),
                    message=strip_ansi("\n\n".join(a.failure_messages)),
                )
            )

    return out


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_workflow_command(annotation: Annotation) -> str:
    """Render as a GitHub Actions ``::error`` workflow command."""
    command = {"failure": "error", "warning": "warning"}.get(annotation.annotation_level, "notice")
    props = ",".join(
        [
            f"file={_escape_property(annotation.path)}",
            f"line={annotation.start_line}",
            f"endLine={annotation.end_line}",
            f"title={_escape_property(annotation.title)}",
        ]
    )
    return f"::{command} {props}::{escape_data(annotation.message)}"
