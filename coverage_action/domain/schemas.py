from typing import Literal

from pydantic import BaseModel

PackageManager = Literal["npm", "yarn", "pnpm"]
SkipStep = Literal["none", "install", "all"]


class Options(BaseModel):
    test_script: str = "npx jest"
    package_manager: PackageManager = "npm"
    working_directory: str | None = None
    skip_step: SkipStep = "none"


def should_install_deps(skip_step: SkipStep) -> bool:
    return skip_step == "none"


def should_run_test_script(skip_step: SkipStep) -> bool:
    return skip_step in ("none", "install")
