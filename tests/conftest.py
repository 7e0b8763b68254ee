"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hone.core.context import Services
from hone.core.models.config import HoneConfig
from hone.core.models.package import RegistryPackage
from hone.core.persistence.manifest import ManifestStore

from tests.fakes import FakeBuilder, FakeFetcher, FakeRegistry, FakeSystem


@pytest.fixture
def config(tmp_path: Path) -> HoneConfig:
    """Configuration with the cache root inside a temp directory."""
    return HoneConfig(cache_root=tmp_path / "cache")


@pytest.fixture
def store(config: HoneConfig) -> ManifestStore:
    return ManifestStore(config.manifest_path)


@pytest.fixture
def make_services(config: HoneConfig, store: ManifestStore):
    """Factory wiring fakes into a Services bundle."""

    def _make(
        installed: dict[str, str] | None = None,
        versions: dict[str, str] | None = None,
        failing_lookups: set[str] | None = None,
        failing_clones: set[str] | None = None,
        failing_builds: set[str] | None = None,
        upgrade_ok: bool = True,
        search_results: list[RegistryPackage] | None = None,
    ) -> Services:
        registry = FakeRegistry(versions, failing_lookups, search_results)
        system = FakeSystem(installed, upgrade_ok=upgrade_ok)
        return Services(
            config=config,
            registry=registry,
            system=system,
            store=store,
            fetcher=FakeFetcher(failing_clones),
            builder=FakeBuilder(system, registry, failing_builds),
        )

    return _make
