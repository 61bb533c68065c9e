import json
from pathlib import Path

import pytest

from coverage_action.core.collector import DataCollector


@pytest.fixture
def collector() -> DataCollector:
    return DataCollector()


@pytest.fixture
def file_coverage() -> dict:
    """A single istanbul FileCoverage entry as found in coverage-final.json."""
    return {
        "path": "/repo/src/sum.js",
        "statementMap": {
            "0": {"start": {"line": 1, "column": 0}, "end": {"line": 3, "column": 1}},
            "1": {"start": {"line": 2, "column": 2}, "end": {"line": 2, "column": 15}},
        },
        "fnMap": {
            "0": {
                "name": "sum",
                "decl": {"start": {"line": 1, "column": 9}, "end": {"line": 1, "column": 12}},
                "loc": {"start": {"line": 1, "column": 17}, "end": {"line": 3, "column": 1}},
            }
        },
        "branchMap": {
            "0": {
                "type": "if",
                "locations": [
                    {"start": {"line": 2, "column": 2}, "end": {"line": 2, "column": 15}},
                    {"start": {"line": 2, "column": 2}, "end": {"line": 2, "column": 15}},
                ],
            }
        },
        "s": {"0": 1, "1": 3},
        "f": {"0": 1},
        "b": {"0": [1, 0]},
    }


@pytest.fixture
def run_report() -> dict:
    """jest --json output (without the coverage map)."""
    return {
        "success": False,
        "numPassedTests": 1,
        "numFailedTests": 1,
        "numTotalTests": 2,
        "numPassedTestSuites": 0,
        "numFailedTestSuites": 1,
        "numTotalTestSuites": 1,
        "testResults": [
            {
                "status": "failed",
                "name": "/repo/src/sum.test.js",
                "message": "",
                "assertionResults": [
                    {
                        "status": "passed",
                        "title": "adds numbers",
                        "ancestorTitles": ["sum"],
                        "failureMessages": [],
                        "location": {"line": 3, "column": 5},
                    },
                    {
                        "status": "failed",
                        "title": "subtracts numbers",
                        "ancestorTitles": ["sum", "negative"],
                        "failureMessages": ["\u001b[31mExpected: 1\u001b[39m", "Received: 2"],
                        "location": {"line": 7, "column": 5},
                    },
                ],
            }
        ],
    }


@pytest.fixture
def full_report(run_report, file_coverage) -> dict:
    return {**run_report, "coverageMap": {file_coverage["path"]: file_coverage}}


@pytest.fixture
def write_json():
    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
