"""Canonical test + coverage report (jest ``--json`` output merged with an
istanbul ``coverage-final.json`` map).

Older runners emit optional fields as ``null`` while newer ones leave them
out entirely.  Both shapes validate to the same model: optional scalars
become ``None`` and optional sequences become empty lists, so callers never
have to tell the two apart.
"""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, StrictInt, model_validator
from pydantic.alias_generators import to_camel

V = TypeVar("V")


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


def _check_numeric_keys(value: Any) -> Any:
    # ids are serialized as strings ("0", "1", ...) but identify numbers;
    # "1" and "01" name the same id
    if isinstance(value, dict):
        seen: dict[int, str] = {}
        for key in value:
            try:
                number = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"id {key!r} is not numeric") from None
            if number in seen:
                raise ValueError(f"ids {seen[number]!r} and {key!r} refer to the same id {number}")
            seen[number] = key
    return value


Count = Annotated[StrictInt, Field(ge=0)]
OptionalList = Annotated[list[V], BeforeValidator(_none_to_list)]
IdMap = Annotated[dict[str, V], BeforeValidator(_check_numeric_keys)]


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Location(_ReportModel):
    line: StrictInt
    column: StrictInt | None = None


class Range(_ReportModel):
    start: Location | None = None
    end: Location | None = None


class StatementRange(_ReportModel):
    start: Location
    end: Location


class FunctionMapping(_ReportModel):
    decl: Range


class BranchMapping(_ReportModel):
    locations: OptionalList[Range] = []


class FileCoverage(_ReportModel):
    path: str
    statement_map: IdMap[StatementRange]
    fn_map: IdMap[FunctionMapping]
    branch_map: IdMap[BranchMapping]
    s: IdMap[Count]
    f: IdMap[Count]
    b: IdMap[list[Count]]

    @model_validator(mode="before")
    @classmethod
    def _unwrap_data(cls, value: Any) -> Any:
        # istanbul's FileCoverage.toJSON() may serialize as {"data": {...}}
        if isinstance(value, dict) and "data" in value and "path" not in value:
            return value["data"]
        return value

    def dangling_ids(self) -> dict[str, list[str]]:
        """Hit-count ids that have no declaration in the matching map.

        Not enforced during validation; consumers use it for diagnostics.
        """
        out: dict[str, list[str]] = {}
        for hits, decls, name in (
            (self.s, self.statement_map, "s"),
            (self.f, self.fn_map, "f"),
            (self.b, self.branch_map, "b"),
        ):
            declared = {int(k) for k in decls}
            missing = sorted((k for k in hits if int(k) not in declared), key=int)
            if missing:
                out[name] = missing
        return out


class AssertionResult(_ReportModel):
    status: str
    location: Location
    title: str
    ancestor_titles: OptionalList[str] = []
    failure_messages: OptionalList[str] = []


class TestFileResult(_ReportModel):
    __test__ = False  # keep pytest from collecting it

    status: str
    name: str
    message: str
    assertion_results: OptionalList[AssertionResult] = []


class Report(_ReportModel):
    success: StrictBool
    num_passed_tests: Count
    num_failed_tests: Count
    num_total_tests: Count
    num_passed_test_suites: Count
    num_failed_test_suites: Count
    num_total_test_suites: Count
    coverage_map: dict[str, FileCoverage]
    test_results: list[TestFileResult] | None = None


def describe_issues(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic ``ValidationError.errors()`` into loggable entries."""
    return [
        {
            "loc": ".".join(str(part) for part in e.get("loc", ())) or "<root>",
            "msg": str(e.get("msg", "")),
            "type": str(e.get("type", "")),
        }
        for e in errors
    ]
