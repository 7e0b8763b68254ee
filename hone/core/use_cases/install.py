"""
Install use case — build and install one AUR package.
"""

from __future__ import annotations

import logging

from hone.core.context import Services
from hone.core.services.build_pipeline import InstallResult, ProgressCallback

logger = logging.getLogger(__name__)


def install_package(
    name: str,
    services: Services,
    on_progress: ProgressCallback | None = None,
) -> InstallResult:
    """Run ``name`` through the full pipeline, warning first about pending updates."""
    logger.info("Installing %s", name)
    return services.pipeline(on_progress).install(name, check_drift=True)
