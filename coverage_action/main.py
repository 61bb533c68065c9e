from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from pydantic import ValidationError

from coverage_action.annotations.failed_tests import create_failed_tests_annotations, escape_data, format_workflow_command
from coverage_action.core.collector import DataCollector
from coverage_action.core.config import settings
from coverage_action.core.errors import ActionError
from coverage_action.core.logging import setup_logging
from coverage_action.domain.report import Report
from coverage_action.domain.schemas import Options
from coverage_action.stages.get_coverage import get_coverage

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="coverage-action",
        description="Run the test suite, collect its coverage report and annotate failed tests.",
    )
    ap.add_argument("--test-script", default=settings.TEST_SCRIPT)
    ap.add_argument("--package-manager", default=settings.PACKAGE_MANAGER, choices=["npm", "yarn", "pnpm"])
    ap.add_argument("--working-directory", default=settings.WORKING_DIRECTORY)
    ap.add_argument("--skip-step", default=settings.SKIP_STEP, choices=["none", "install", "all"])
    ap.add_argument("--coverage-file", default=settings.COVERAGE_FILE)
    ap.add_argument("--run-all", action="store_true", help="run every stage regardless of --skip-step")
    return ap


def _print_errors(collector: DataCollector[Report]) -> None:
    # non-fatal stage failures surface as warnings
    for err in collector.get().errors:
        print(f"::warning::{escape_data(str(err))}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    # argparse does not check env-provided defaults against `choices`
    try:
        options = Options(
            test_script=args.test_script,
            package_manager=args.package_manager,
            working_directory=args.working_directory,
            skip_step=args.skip_step,
        )
    except ValidationError as e:
        issues = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        parser.error(f"invalid options: {issues}")

    collector: DataCollector[Report] = DataCollector()

    logger.info("Running with options %s", options.model_dump())

    try:
        report = get_coverage(collector, options, args.run_all, args.coverage_file)
    except ActionError as e:
        _print_errors(collector)
        print(f"::error::{escape_data(str(e))}")
        return 1

    _print_errors(collector)

    for annotation in create_failed_tests_annotations(report):
        print(format_workflow_command(annotation))

    print(
        f"[coverage] tests: {report.num_passed_tests} passed, {report.num_failed_tests} failed, "
        f"{report.num_total_tests} total; files with coverage: {len(report.coverage_map)}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
