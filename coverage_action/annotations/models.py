from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

AnnotationLevel = Literal["notice", "warning", "failure"]


@dataclass(frozen=True)
class Annotation:
    annotation_level: AnnotationLevel
    path: str
    start_line: int
    end_line: int
    title: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
