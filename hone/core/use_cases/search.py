"""
Search use case — find AUR packages by name.
"""

from __future__ import annotations

from hone.core.context import Services
from hone.core.services.search import SearchResult, search_packages


def run_search(query: str, services: Services, names_only: bool = False) -> SearchResult:
    return search_packages(services.registry, services.system, query, names_only=names_only)
