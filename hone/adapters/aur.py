"""
AUR client — read-only queries against the AUR RPC interface.

Two queries are used:

    GET <registry_url>?v=5&type=search&arg=<query>
    GET <registry_url>?v=5&type=info&arg=<name>

The response is a JSON object with an integer ``resultcount`` and a
``results`` array.  Failures never propagate: a search degrades to an
empty list and a version lookup to a ``failed`` VersionLookup.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from hone.adapters.base import PackageRegistry
from hone.core.models.package import RegistryPackage, VersionLookup

logger = logging.getLogger(__name__)

RPC_VERSION = "5"


class RegistryQueryError(Exception):
    """The registry could not be reached or sent an unusable response."""


class AurClient(PackageRegistry):
    """AUR RPC client built on urllib."""

    def __init__(
        self,
        base_url: str = "https://aur.archlinux.org/rpc/",
        user_agent: str = "hone/0.1",
        timeout: int = 30,
    ) -> None:
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout

    def build_url(self, query_type: str, arg: str) -> str:
        params = urllib.parse.urlencode({"v": RPC_VERSION, "type": query_type, "arg": arg})
        return f"{self.base_url}?{params}"

    # ── Queries ─────────────────────────────────────────────────

    def search(self, query: str) -> list[RegistryPackage]:
        try:
            payload = self._query("search", query)
        except RegistryQueryError as e:
            logger.warning("AUR search for %r failed: %s", query, e)
            return []

        count, results = payload
        if count <= 0:
            logger.info("AUR search for %r returned no results", query)
            return []

        packages = []
        for raw in results:
            if isinstance(raw, dict):
                packages.append(RegistryPackage.from_rpc(raw))
        return packages

    def lookup_version(self, name: str) -> VersionLookup:
        try:
            count, results = self._query("info", name)
        except RegistryQueryError as e:
            logger.debug("AUR info for %r failed: %s", name, e)
            return VersionLookup.failure(name, str(e))

        if count <= 0 or not results:
            return VersionLookup.miss(name)

        first = results[0]
        version = first.get("Version") if isinstance(first, dict) else None
        if not version:
            return VersionLookup.failure(name, "result carries no Version field")
        return VersionLookup.hit(name, str(version))

    # ── Transport ───────────────────────────────────────────────

    def _query(self, query_type: str, arg: str) -> tuple[int, list[Any]]:
        """Perform one RPC call and return ``(resultcount, results)``."""
        url = self.build_url(query_type, arg)
        logger.debug("GET %s", url)

        req = urllib.request.Request(
            url,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                body = resp.read()
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise RegistryQueryError(str(e)[:200]) from e

        return parse_rpc_response(body)


def parse_rpc_response(body: bytes | str) -> tuple[int, list[Any]]:
    """Validate an RPC body and return ``(resultcount, results)``.

    Raises:
        RegistryQueryError: If the body is not the expected JSON shape.
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RegistryQueryError(f"malformed response: {e}") from e

    if not isinstance(data, dict):
        raise RegistryQueryError("malformed response: not a JSON object")

    if data.get("type") == "error":
        raise RegistryQueryError(f"registry error: {data.get('error', 'unknown')}")

    count = data.get("resultcount")
    if not isinstance(count, int) or isinstance(count, bool):
        raise RegistryQueryError("malformed response: missing resultcount")

    results = data.get("results") or []
    if not isinstance(results, list):
        raise RegistryQueryError("malformed response: results is not a list")

    return count, results
