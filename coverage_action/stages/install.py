from __future__ import annotations

import logging
import shutil

from coverage_action.core.util import CmdResult, join_paths, run_cmd
from coverage_action.domain.schemas import PackageManager

logger = logging.getLogger(__name__)


def install_dependencies(
    package_manager: PackageManager = "npm",
    working_directory: str | None = None,
) -> CmdResult:
    # install always starts from an empty node_modules
    node_modules = join_paths(working_directory, "node_modules")
    if node_modules.is_dir():
        logger.info("Removing %s", node_modules, extra={"stage": "install"})
        shutil.rmtree(node_modules)

    r = run_cmd(
        [package_manager, "install"],
        cwd=join_paths(working_directory) if working_directory else None,
        timeout_sec=900,
    )
    return r.check()
