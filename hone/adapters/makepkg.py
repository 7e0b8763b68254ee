"""
Makepkg adapter — builds and installs a package from its workspace.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from hone.adapters.shell.command import run_command
from hone.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class MakepkgBuilder:
    """Runs ``makepkg`` inside a workspace directory.

    The default flags (``-risc``) sync dependencies, install the result,
    remove build-time dependencies and clean up the build tree.
    """

    def __init__(
        self,
        makepkg: str = "makepkg",
        flags: list[str] | None = None,
        runner: Callable[..., Receipt] = run_command,
    ) -> None:
        self._makepkg = makepkg
        self._flags = list(flags) if flags is not None else ["-risc"]
        self._run = runner

    def build_and_install(self, workspace: Path) -> Receipt:
        if not workspace.is_dir():
            return Receipt.failure(
                command=[self._makepkg, *self._flags],
                error=f"Package directory does not exist: {workspace}",
            )
        logger.info("Building in %s", workspace)
        return self._run([self._makepkg, *self._flags], cwd=workspace, interactive=True)
