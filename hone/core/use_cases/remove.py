"""
Remove use case — uninstall a package and stop tracking it.
"""

from __future__ import annotations

from hone.core.context import Services
from hone.core.services.build_pipeline import RemoveResult


def remove_package(name: str, services: Services) -> RemoveResult:
    return services.pipeline().remove(name)
