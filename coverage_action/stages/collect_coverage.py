from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from coverage_action.core.collector import DataCollector
from coverage_action.core.errors import ActionError, FailReason
from coverage_action.core.util import join_paths
from coverage_action.domain.report import Report, describe_issues

logger = logging.getLogger(__name__)

REPORT_PATH = "report.json"
COVERAGE_MAP_PATH = ("coverage", "coverage-final.json")


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise ActionError(FailReason.REPORT_NOT_FOUND, {"coverage_path": str(path)}) from None
    except OSError as e:
        raise ActionError(FailReason.READING_COVERAGE_FILE_FAILED, {"error": str(e)}) from e


def _parse_json(content: bytes, path: Path) -> Any:
    # undecodable bytes, oversized int literals and deep nesting are all bad content
    try:
        return json.loads(content.decode("utf-8"))
    except (ValueError, RecursionError) as e:
        raise ActionError(
            FailReason.INVALID_COVERAGE_FORMAT,
            {"coverage_path": str(path), "error": str(e)},
        ) from e


def extract_report_json(
    collector: DataCollector[Any],
    working_directory: str | None = None,
    coverage_file: str | None = None,
) -> Any:
    """Load the raw report, merging the coverage map in when needed."""
    # A pre-generated report already embeds its coverage map
    if coverage_file:
        report_path = join_paths(working_directory, coverage_file)
        collector.info(f"Loading code coverage from file: {report_path}")
        return _parse_json(_read_file(report_path), report_path)

    report_path = join_paths(working_directory, REPORT_PATH)
    coverage_map_path = join_paths(working_directory, *COVERAGE_MAP_PATH)

    collector.info(f"Loading code coverage from file: {report_path}")
    report_bytes = _read_file(report_path)
    collector.info(f"Loading code coverage from file: {coverage_map_path}")
    coverage_map_bytes = _read_file(coverage_map_path)

    report = _parse_json(report_bytes, report_path)
    coverage_map = _parse_json(coverage_map_bytes, coverage_map_path)

    if not isinstance(report, dict):
        raise ActionError(
            FailReason.INVALID_COVERAGE_FORMAT,
            {"coverage_path": str(report_path), "error": "report is not a JSON object"},
        )
    report["coverageMap"] = coverage_map
    return report


def collect_coverage(
    collector: DataCollector[Any],
    working_directory: str | None = None,
    coverage_file: str | None = None,
) -> Report:
    raw = extract_report_json(collector, working_directory, coverage_file)

    try:
        report = Report.model_validate(raw)
    except ValidationError as e:
        issues = describe_issues(e.errors())
        collector.info("Report did not match the schema. Issues: " + json.dumps(issues))
        raise ActionError(FailReason.INVALID_COVERAGE_FORMAT, {"issues": issues}) from None

    for path, file_coverage in report.coverage_map.items():
        dangling = file_coverage.dangling_ids()
        if dangling:
            logger.debug("Undeclared coverage ids in %s: %s", path, dangling)

    return report
