from __future__ import annotations

from enum import Enum
from typing import Any


class FailReason(str, Enum):
    REPORT_NOT_FOUND = "reportNotFound"
    READING_COVERAGE_FILE_FAILED = "readingCoverageFileFailed"
    INVALID_COVERAGE_FORMAT = "invalidFormat"
    FAILED_GETTING_COVERAGE = "failedGettingCoverage"


_MESSAGES: dict[FailReason, str] = {
    FailReason.REPORT_NOT_FOUND: "Coverage report not found at {coverage_path}",
    FailReason.READING_COVERAGE_FILE_FAILED: "Failed reading coverage file: {error}",
    FailReason.INVALID_COVERAGE_FORMAT: "Coverage output has invalid format",
    FailReason.FAILED_GETTING_COVERAGE: "Getting code coverage data failed",
}


class ActionError(Exception):
    """Error with a closed-set reason and a context payload."""

    def __init__(self, reason: FailReason, details: dict[str, Any] | None = None):
        self.reason = reason
        self.details = dict(details or {})
        self.stage: str | None = None
        super().__init__(self._render())

    def _render(self) -> str:
        template = _MESSAGES[self.reason]
        try:
            return template.format(**self.details)
        except KeyError:
            return template

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ActionError):
            return NotImplemented
        return self.reason == other.reason and self.details == other.details

    def __hash__(self) -> int:
        return hash(self.reason)

    def __repr__(self) -> str:
        return f"ActionError({self.reason.name}, {self.details!r})"


class StageError(Exception):
    """Unexpected failure inside a stage body, tagged with the stage name."""

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage '{stage}' failed: {cause}")
