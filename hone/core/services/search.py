"""
Search — query the AUR and keep results whose name contains the query.

The query is matched literally and case-insensitively, so ``c++`` finds
``c++`` rather than being read as a pattern.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from hone.adapters.base import PackageRegistry, SystemPackageManager

logger = logging.getLogger(__name__)


@dataclass
class SearchMatch:
    name: str
    version: str
    description: str
    installed: bool | None = None


@dataclass
class SearchResult:
    query: str
    found: bool = False
    matches: list[SearchMatch] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "found": self.found,
            "matches": [
                {
                    "name": m.name,
                    "version": m.version,
                    "description": m.description,
                    "installed": m.installed,
                }
                for m in self.matches
            ],
        }


def name_filter(query: str) -> re.Pattern[str]:
    """Case-insensitive literal containment filter for ``query``."""
    return re.compile(re.escape(query), re.IGNORECASE)


def search_packages(
    registry: PackageRegistry,
    system: SystemPackageManager | None,
    query: str,
    names_only: bool = False,
) -> SearchResult:
    """Search the registry and narrow results to names containing ``query``.

    When ``names_only`` is False each match is annotated with whether it
    is installed, one system query per match.
    """
    result = SearchResult(query=query)

    packages = registry.search(query)
    if not packages:
        return result
    result.found = True

    pattern = name_filter(query)
    for pkg in packages:
        if not pattern.search(pkg.name):
            continue
        installed = None
        if not names_only and system is not None:
            installed = system.is_installed(pkg.name)
        result.matches.append(
            SearchMatch(
                name=pkg.name,
                version=pkg.version,
                description=pkg.description,
                installed=installed,
            )
        )

    logger.debug("Search %r: %d results, %d matched", query, len(packages), len(result.matches))
    return result
