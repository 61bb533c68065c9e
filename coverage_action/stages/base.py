from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from coverage_action.core.collector import DataCollector
from coverage_action.core.errors import ActionError, StageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Skipped:
    reason: str = ""


@dataclass(frozen=True)
class Failed:
    error: Exception


@dataclass(frozen=True)
class Succeeded(Generic[T]):
    value: T


StageOutcome = Union[Skipped, Failed, Succeeded[T]]


def run_stage(
    name: str,
    collector: DataCollector[Any],
    body: Callable[[], Any],
) -> tuple[bool, Any]:
    """Run one named unit of work and record its failure, if any.

    ``body`` returns ``Skipped``, ``Failed`` or ``Succeeded``; a plain return
    value counts as success and a raised exception as failure.  Skipping is
    not an error: nothing is added to the collector.
    """
    log_extra = {"stage": name}
    logger.info("Stage %s started", name, extra=log_extra)

    try:
        outcome = body()
    except Exception as e:  # stage failures are recorded, never propagated
        outcome = Failed(e)

    if isinstance(outcome, Skipped):
        logger.info("Stage %s skipped %s", name, outcome.reason, extra=log_extra)
        return False, None

    if isinstance(outcome, Failed):
        collector.error(_tag(name, outcome.error))
        logger.info("Stage %s failed", name, extra=log_extra)
        return False, None

    value = outcome.value if isinstance(outcome, Succeeded) else outcome
    logger.info("Stage %s finished", name, extra=log_extra)
    return True, value


def _tag(name: str, error: Exception) -> Exception:
    if isinstance(error, ActionError):
        error.stage = name
        return error
    if isinstance(error, StageError):
        return error
    return StageError(name, error)
