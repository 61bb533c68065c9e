import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


class CommandError(RuntimeError):
    def __init__(self, cmd: Sequence[str], exit_code: int, stderr: str = ""):
        self.cmd = list(cmd)
        self.exit_code = exit_code
        self.stderr = stderr
        msg = f"Command {' '.join(self.cmd)!r} exited with code {exit_code}"
        if stderr.strip():
            msg += f": {stderr.strip()[-500:]}"
        super().__init__(msg)


@dataclass
class CmdResult:
    cmd: list[str]
    exit_code: int
    stdout: str
    stderr: str

    def check(self) -> "CmdResult":
        if self.exit_code != 0:
            raise CommandError(self.cmd, self.exit_code, self.stderr)
        return self


def run_cmd(cmd: Sequence[str], cwd: Path | None = None, timeout_sec: int = 900) -> CmdResult:
    p = subprocess.run(
        list(cmd),
        cwd=str(cwd) if cwd else None,
        capture_output=True,
        text=True,
        timeout=timeout_sec
    )
    return CmdResult(list(cmd), p.returncode, p.stdout or "", p.stderr or "")


def join_paths(working_directory: str | None, *parts: str) -> Path:
    if working_directory:
        return Path(working_directory, *parts)
    return Path(*parts)
