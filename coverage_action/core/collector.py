from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CollectedData:
    errors: tuple[Exception, ...]
    info: tuple[str, ...]


@dataclass
class DataCollector(Generic[T]):
    """Accumulates info messages and recoverable errors for one run.

    Errors are only ever appended; the snapshot returned by ``get()`` is
    read once at the end of the run to report what went wrong without
    aborting it.
    """

    _errors: list[Exception] = field(default_factory=list)
    _info: list[str] = field(default_factory=list)

    def info(self, message: str) -> None:
        self._info.append(message)
        logger.info(message)

    def error(self, err: Exception) -> None:
        self._errors.append(err)
        logger.warning("%s", err, extra={"stage": getattr(err, "stage", None)})

    def get(self) -> CollectedData:
        return CollectedData(errors=tuple(self._errors), info=tuple(self._info))
