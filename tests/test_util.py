from pathlib import Path

import pytest

from coverage_action.core.util import CmdResult, CommandError, join_paths


def test_check_passes_through_success():
    r = CmdResult(["npm", "install"], 0, "ok", "")
    assert r.check() is r


def test_check_raises_on_non_zero_exit():
    r = CmdResult(["npm", "install"], 1, "", "ERR! 404 Not Found")

    with pytest.raises(CommandError) as exc:
        r.check()

    assert exc.value.exit_code == 1
    assert exc.value.cmd == ["npm", "install"]
    assert "404 Not Found" in str(exc.value)


def test_join_paths_without_working_directory():
    assert join_paths(None, "report.json") == Path("report.json")
    assert join_paths("", "coverage", "coverage-final.json") == Path("coverage/coverage-final.json")


def test_join_paths_with_working_directory():
    assert join_paths("pkg", "report.json") == Path("pkg/report.json")
