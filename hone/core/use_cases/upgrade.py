"""
Upgrade use case — find outdated AUR packages and rebuild them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hone.core.context import Services
from hone.core.services.build_pipeline import BatchResult, ProgressCallback
from hone.core.services.drift import DriftReport, compute_update_candidates

logger = logging.getLogger(__name__)


@dataclass
class UpgradeResult:
    report: DriftReport = field(default_factory=DriftReport)
    batch: BatchResult = field(default_factory=BatchResult)

    @property
    def ok(self) -> bool:
        return self.batch.ok

    @property
    def error(self) -> str | None:
        return self.batch.error

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "check": self.report.to_dict(),
            "batch": self.batch.to_dict(),
        }


def run_upgrade(
    services: Services,
    skip_system_upgrade: bool = False,
    on_progress: ProgressCallback | None = None,
) -> UpgradeResult:
    """Check every foreign package for drift, then upgrade the outdated ones."""
    report = compute_update_candidates(
        services.system, services.registry, services.config.debug_suffixes,
    )
    logger.info("Upgrading %d package(s)", len(report.candidates))

    batch = services.pipeline(on_progress).update_all(
        report.candidates,
        skip_system_upgrade=skip_system_upgrade,
    )
    return UpgradeResult(report=report, batch=batch)
