from __future__ import annotations

import logging

from coverage_action.core.collector import DataCollector
from coverage_action.core.errors import ActionError, FailReason
from coverage_action.domain.report import Report
from coverage_action.domain.schemas import Options, should_install_deps, should_run_test_script
from coverage_action.stages.base import Skipped, StageOutcome, Succeeded, run_stage
from coverage_action.stages.collect_coverage import collect_coverage
from coverage_action.stages.install import install_dependencies
from coverage_action.stages.run_test import run_test

logger = logging.getLogger(__name__)


def get_coverage(
    collector: DataCollector[Report],
    options: Options,
    run_all: bool = False,
    coverage_file_path: str | None = None,
) -> Report:
    """
    Runs: install -> runTest -> collectCoverage.

    Install and test failures are recorded and ignored; only a missing or
    invalid report is fatal.
    """

    def install() -> StageOutcome:
        if coverage_file_path:
            return Skipped("coverage file provided")
        if not run_all and not should_install_deps(options.skip_step):
            return Skipped(f"skip-step={options.skip_step}")
        return Succeeded(install_dependencies(options.package_manager, options.working_directory))

    def run_tests() -> StageOutcome:
        if coverage_file_path:
            return Skipped("coverage file provided")
        if not run_all and not should_run_test_script(options.skip_step):
            return Skipped(f"skip-step={options.skip_step}")
        return Succeeded(run_test(options.test_script, options.working_directory))

    def collect() -> StageOutcome:
        return Succeeded(collect_coverage(collector, options.working_directory, coverage_file_path))

    run_stage("install", collector, install)
    run_stage("runTest", collector, run_tests)
    parsed, report = run_stage("collectCoverage", collector, collect)

    if not parsed or report is None:
        raise ActionError(FailReason.FAILED_GETTING_COVERAGE)

    logger.info(
        "Coverage collected: %d files, %d/%d tests passed",
        len(report.coverage_map),
        report.num_passed_tests,
        report.num_total_tests,
    )
    return report
