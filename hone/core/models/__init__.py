"""
Domain models — Pydantic types for hone.

All models are re-exported here for convenient access:

    from hone.core.models import HoneConfig, ManifestEntry, Receipt
"""

from hone.core.models.config import HoneConfig
from hone.core.models.package import (
    InstalledPackage,
    ManifestEntry,
    RegistryPackage,
    VersionLookup,
)
from hone.core.models.receipt import Receipt

__all__ = [
    # config.py
    "HoneConfig",
    # package.py
    "InstalledPackage",
    "ManifestEntry",
    # receipt.py
    "Receipt",
    "RegistryPackage",
    "VersionLookup",
]
