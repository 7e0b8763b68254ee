"""
Runtime context — the collaborators every use case works with.

The CLI loads the configuration once and calls ``build_services``.
Tests build a ``Services`` by hand with fakes in place of pacman and
the AUR.
"""

from __future__ import annotations

from dataclasses import dataclass

from hone.adapters.aur import AurClient
from hone.adapters.base import PackageRegistry, SystemPackageManager
from hone.adapters.git import GitFetcher
from hone.adapters.makepkg import MakepkgBuilder
from hone.adapters.pacman import PacmanAdapter
from hone.core.models.config import HoneConfig
from hone.core.persistence.manifest import ManifestStore
from hone.core.services.build_pipeline import BuildPipeline, ProgressCallback


@dataclass
class Services:
    config: HoneConfig
    registry: PackageRegistry
    system: SystemPackageManager
    store: ManifestStore
    fetcher: GitFetcher
    builder: MakepkgBuilder

    def pipeline(self, on_progress: ProgressCallback | None = None) -> BuildPipeline:
        return BuildPipeline(
            config=self.config,
            registry=self.registry,
            system=self.system,
            store=self.store,
            fetcher=self.fetcher,
            builder=self.builder,
            on_progress=on_progress,
        )


def build_services(config: HoneConfig) -> Services:
    """Wire the real adapters from a loaded configuration."""
    return Services(
        config=config,
        registry=AurClient(
            base_url=config.registry_url,
            user_agent=config.user_agent,
            timeout=config.request_timeout,
        ),
        system=PacmanAdapter(pacman=config.pacman, sudo=config.sudo),
        store=ManifestStore(config.manifest_path),
        fetcher=GitFetcher(git=config.git),
        builder=MakepkgBuilder(makepkg=config.makepkg, flags=config.makepkg_flags),
    )
