"""
Git adapter — fetches AUR build recipes.

Each AUR package is a git repository holding its PKGBUILD.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from hone.adapters.shell.command import run_command
from hone.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class GitFetcher:
    """Clones a package's recipe repository into its workspace."""

    def __init__(self, git: str = "git", runner: Callable[..., Receipt] = run_command) -> None:
        self._git = git
        self._run = runner

    def clone(self, url: str, dest: Path) -> Receipt:
        dest.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Cloning %s into %s", url, dest)
        return self._run([self._git, "clone", url, str(dest)], cwd=dest.parent, interactive=True)
