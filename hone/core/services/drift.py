"""
Drift detection — which installed AUR packages have a newer registry version.

The installed set comes from the system package manager; the current
version comes from the registry.  Versions are compared as plain
strings: any textual difference counts as drift.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hone.adapters.base import PackageRegistry, SystemPackageManager

logger = logging.getLogger(__name__)

DEFAULT_DEBUG_SUFFIXES = ("-debug",)


@dataclass
class Drift:
    """One package whose registry version differs from the installed one."""

    name: str
    installed: str
    available: str


@dataclass
class DriftReport:
    """Result of an update check, in pacman enumeration order."""

    drifts: list[Drift] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped_debug: list[str] = field(default_factory=list)
    checked: int = 0

    @property
    def candidates(self) -> list[str]:
        return [d.name for d in self.drifts]

    @property
    def has_updates(self) -> bool:
        return bool(self.drifts)

    def to_dict(self) -> dict:
        return {
            "candidates": [
                {"name": d.name, "installed": d.installed, "available": d.available}
                for d in self.drifts
            ],
            "not_found": self.not_found,
            "failed": self.failed,
            "skipped_debug": self.skipped_debug,
            "checked": self.checked,
        }


def is_debug_package(name: str, suffixes: tuple[str, ...] | list[str] = DEFAULT_DEBUG_SUFFIXES) -> bool:
    return any(name.endswith(suffix) for suffix in suffixes)


def compute_update_candidates(
    system: SystemPackageManager,
    registry: PackageRegistry,
    debug_suffixes: tuple[str, ...] | list[str] = DEFAULT_DEBUG_SUFFIXES,
) -> DriftReport:
    """Compare every foreign package against the registry.

    Debug variants are skipped.  Packages the registry does not know, or
    cannot be asked about, are skipped with a warning rather than failing
    the whole check.
    """
    report = DriftReport()

    for pkg in system.list_foreign_installed():
        if is_debug_package(pkg.name, debug_suffixes):
            report.skipped_debug.append(pkg.name)
            continue

        report.checked += 1
        lookup = registry.lookup_version(pkg.name)

        if lookup.status == "not_found":
            logger.warning("Package %s not found in the AUR", pkg.name)
            report.not_found.append(pkg.name)
            continue
        if lookup.status == "failed":
            logger.warning("Could not check %s against the AUR: %s", pkg.name, lookup.error)
            report.failed.append(pkg.name)
            continue

        if lookup.version != pkg.version:
            logger.debug("%s: installed %s, AUR has %s", pkg.name, pkg.version, lookup.version)
            report.drifts.append(
                Drift(name=pkg.name, installed=pkg.version, available=lookup.version or "")
            )

    logger.info(
        "Update check: %d checked, %d outdated, %d not in AUR",
        report.checked, len(report.drifts), len(report.not_found),
    )
    return report
