"""
Pacman adapter — system package queries and privileged operations.

Read-only queries (``-Q``, ``-Qm``) capture output.  Upgrades and
removals run interactively through sudo so pacman can prompt.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from hone.adapters.base import SystemPackageManager
from hone.adapters.shell.command import run_command
from hone.core.models.package import InstalledPackage
from hone.core.models.receipt import Receipt

logger = logging.getLogger(__name__)

Runner = Callable[..., Receipt]


class PacmanAdapter(SystemPackageManager):
    """Talks to pacman through the shell runner."""

    def __init__(
        self,
        pacman: str = "pacman",
        sudo: str = "sudo",
        runner: Runner = run_command,
    ) -> None:
        self._pacman = pacman
        self._sudo = sudo
        self._run = runner

    @property
    def name(self) -> str:
        return "pacman"

    def is_installed(self, package: str) -> bool:
        receipt = self._run([self._pacman, "-Q", package])
        if receipt.metadata.get("spawn_failed"):
            logger.warning("Could not query %s for %s; assuming not installed", self._pacman, package)
            return False
        return receipt.ok and bool(receipt.output)

    def list_foreign_installed(self) -> list[InstalledPackage]:
        receipt = self._run([self._pacman, "-Qm"])
        if receipt.failed:
            # pacman -Qm exits 1 when there are no foreign packages at all
            if receipt.return_code == 1 and not receipt.output:
                return []
            logger.warning("Could not list foreign packages: %s", receipt.error)
            return []
        return parse_package_list(receipt.output)

    def system_upgrade(self) -> Receipt:
        return self._run([self._sudo, self._pacman, "-Syu"], interactive=True)

    def remove(self, package: str) -> Receipt:
        return self._run([self._sudo, self._pacman, "-Rns", package], interactive=True)


def parse_package_list(output: str) -> list[InstalledPackage]:
    """Parse ``pacman -Q``-style output into name/version pairs.

    Lines that do not split into exactly two fields are skipped.
    """
    packages: list[InstalledPackage] = []
    for line in output.splitlines():
        fields = line.split()
        if len(fields) != 2:
            if line.strip():
                logger.debug("Skipping malformed pacman line: %r", line)
            continue
        packages.append(InstalledPackage(name=fields[0], version=fields[1]))
    return packages
