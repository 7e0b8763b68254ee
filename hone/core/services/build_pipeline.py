"""
Build pipeline — fetch, build, install, clean and record AUR packages.

Each package walks a strict sequence:

    RESOLVING → CLONING → BUILDING → CLEANING → RECORDED
                    ↘          ↘
                       FAILED

RESOLVING asks the registry for the version that will be recorded.
A failed clone or build stops the package and leaves its workspace on
disk so the build log can be inspected; only a successful build
removes it.  Batches run one package at a time and stop at the first
failure.

All commands receive their working directory explicitly; the process
cwd is never touched.
"""

from __future__ import annotations

import enum
import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from hone.adapters.base import PackageRegistry, SystemPackageManager
from hone.adapters.git import GitFetcher
from hone.adapters.makepkg import MakepkgBuilder
from hone.core.models.config import HoneConfig
from hone.core.models.receipt import Receipt
from hone.core.persistence.manifest import ManifestError, ManifestStore
from hone.core.services.drift import compute_update_candidates
from hone.core.services.reconcile import sync_manifest_with_installed

logger = logging.getLogger(__name__)


class BuildState(str, enum.Enum):
    RESOLVING = "resolving"
    CLONING = "cloning"
    BUILDING = "building"
    CLEANING = "cleaning"
    RECORDED = "recorded"
    FAILED = "failed"


ProgressCallback = Callable[[str, BuildState], None]


@dataclass
class InstallResult:
    """Outcome of one package going through the pipeline."""

    name: str
    state: BuildState = BuildState.RESOLVING
    version: str | None = None
    failed_at: BuildState | None = None
    error: str | None = None
    workspace: Path | None = None
    updates_due: list[str] = field(default_factory=list)
    receipts: list[Receipt] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.state == BuildState.RECORDED

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "ok": self.ok,
            "state": self.state.value,
            "version": self.version,
            "failed_at": self.failed_at.value if self.failed_at else None,
            "error": self.error,
            "workspace": str(self.workspace) if self.workspace else None,
            "updates_due": self.updates_due,
        }


@dataclass
class BatchResult:
    """Outcome of an upgrade run over several packages."""

    requested: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    failed_package: str | None = None
    system_upgrade_failed: bool = False
    error: str | None = None
    results: list[InstallResult] = field(default_factory=list)
    recorded: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "requested": self.requested,
            "updated": self.updated,
            "failed_package": self.failed_package,
            "system_upgrade_failed": self.system_upgrade_failed,
            "error": self.error,
            "newly_recorded": self.recorded,
            "results": [r.to_dict() for r in self.results],
        }


@dataclass
class RemoveResult:
    name: str
    removed: bool = False
    untracked: bool = False
    error: str | None = None
    receipt: Receipt | None = None

    @property
    def ok(self) -> bool:
        return self.removed and self.error is None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "ok": self.ok,
            "removed": self.removed,
            "untracked": self.untracked,
            "error": self.error,
        }


class BuildPipeline:
    """Drives packages through the build sequence and keeps the manifest in step."""

    def __init__(
        self,
        config: HoneConfig,
        registry: PackageRegistry,
        system: SystemPackageManager,
        store: ManifestStore,
        fetcher: GitFetcher,
        builder: MakepkgBuilder,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self.config = config
        self.registry = registry
        self.system = system
        self.store = store
        self.fetcher = fetcher
        self.builder = builder
        self.on_progress = on_progress

    # ── Single package ──────────────────────────────────────────

    def install(self, name: str, check_drift: bool = True) -> InstallResult:
        """Fetch, build, install and record one package.

        Args:
            name: Exact AUR package name.
            check_drift: Warn first if other installed packages are outdated.
                The warning never blocks the install.
        """
        workspace = self.config.workspace_for(name)
        result = InstallResult(name=name, workspace=workspace)

        if check_drift:
            report = compute_update_candidates(
                self.system, self.registry, self.config.debug_suffixes,
            )
            if report.has_updates:
                result.updates_due = report.candidates
                logger.info("Updates due: %s", ", ".join(report.candidates))

        # ── Resolve ──
        self._enter(result, BuildState.RESOLVING)
        lookup = self.registry.lookup_version(name)
        if not lookup.found:
            reason = (
                f"Package {name} not found in the AUR"
                if lookup.status == "not_found"
                else f"Could not query the AUR for {name}: {lookup.error}"
            )
            return self._fail(result, reason)
        result.version = lookup.version

        # ── Clone ──
        self._enter(result, BuildState.CLONING)
        if workspace.exists():
            logger.info("Removing stale workspace %s", workspace)
            shutil.rmtree(workspace, ignore_errors=True)

        receipt = self.fetcher.clone(self.config.clone_url_for(name), workspace)
        result.receipts.append(receipt)
        if receipt.failed:
            return self._fail(result, f"Failed to clone {name}: {receipt.error}")

        # ── Build + install ──
        self._enter(result, BuildState.BUILDING)
        receipt = self.builder.build_and_install(workspace)
        result.receipts.append(receipt)
        if receipt.failed:
            logger.info("Keeping %s for inspection", workspace)
            return self._fail(result, f"Failed to build {name}: {receipt.error}")

        # ── Clean ──
        self._enter(result, BuildState.CLEANING)
        self._clean(workspace)

        # ── Record ──
        try:
            self.store.record(name, result.version or "")
        except ManifestError as e:
            result.error = str(e)
            result.failed_at = BuildState.RECORDED
            result.state = BuildState.FAILED
            logger.error("%s was installed but could not be recorded: %s", name, e)
            return result

        self._enter(result, BuildState.RECORDED)
        return result

    # ── Batch ───────────────────────────────────────────────────

    def update_all(self, candidates: list[str], skip_system_upgrade: bool = False) -> BatchResult:
        """Upgrade ``candidates`` in order, stopping at the first failure.

        Unless ``skip_system_upgrade`` is set, a full system upgrade runs
        first; if it fails nothing else is attempted.  After every
        candidate succeeds, the manifest is reconciled over them.
        """
        batch = BatchResult(requested=list(candidates))

        if not skip_system_upgrade:
            receipt = self.system.system_upgrade()
            if receipt.failed:
                batch.system_upgrade_failed = True
                batch.error = (
                    "System update failed, please run "
                    f"'{self.config.pacman} -Syu' manually"
                )
                logger.error("%s (%s)", batch.error, receipt.error)
                return batch

        for name in candidates:
            logger.info("Updating %s", name)
            result = self.install(name, check_drift=False)
            batch.results.append(result)
            if not result.ok:
                batch.failed_package = name
                batch.error = f"Failed to update package {name}: {result.error}"
                logger.error(batch.error)
                return batch
            batch.updated.append(name)

        try:
            batch.recorded = sync_manifest_with_installed(self.store, self.registry, batch.updated)
        except ManifestError as e:
            batch.error = str(e)
            logger.error("Manifest reconciliation failed: %s", e)
        return batch

    # ── Remove ──────────────────────────────────────────────────

    def remove(self, name: str) -> RemoveResult:
        """Uninstall ``name`` through the system package manager and untrack it."""
        result = RemoveResult(name=name)

        if not self.system.is_installed(name):
            result.error = f"Package {name} is not installed"
            return result

        receipt = self.system.remove(name)
        result.receipt = receipt
        if receipt.failed:
            result.error = f"Failed to remove {name}: {receipt.error}"
            logger.error(result.error)
            return result

        result.removed = True
        try:
            result.untracked = self.store.discard(name)
        except ManifestError as e:
            result.error = str(e)
            logger.error("%s was removed but the manifest could not be updated: %s", name, e)
        return result

    # ── Internals ───────────────────────────────────────────────

    def _enter(self, result: InstallResult, state: BuildState) -> None:
        result.state = state
        logger.debug("%s → %s", result.name, state.value)
        if self.on_progress is not None:
            self.on_progress(result.name, state)

    def _fail(self, result: InstallResult, error: str) -> InstallResult:
        result.failed_at = result.state
        result.error = error
        logger.error(error)
        self._enter(result, BuildState.FAILED)
        return result

    @staticmethod
    def _clean(workspace: Path) -> None:
        try:
            shutil.rmtree(workspace)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove workspace %s: %s", workspace, e)
