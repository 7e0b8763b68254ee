"""
Manifest persistence — the local record of installed AUR packages.

The manifest is a UTF-8 text file with one ``<name> <version>`` line
per tracked package, kept at ``<cache_root>/Installed/package_list.txt``.
There is no escaping, so names and versions must not contain
whitespace; the store refuses to write such values.  Lines with more
than two fields are not entries: they are ignored on load and written
back unchanged, after the entries, on every rewrite.

Full rewrites go through a temp file in the same directory followed by
a rename, so a failed write never leaves a truncated manifest.  There is
no locking: the store assumes a single writer.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from hone.core.models.package import ManifestEntry

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when the manifest cannot be read or written."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ManifestStore:
    """Owns the manifest file contents."""

    def __init__(self, path: Path) -> None:
        self.path = path

    # ── Read ────────────────────────────────────────────────────

    def load(self) -> list[ManifestEntry]:
        """Return all entries in on-disk order, creating an empty file if needed."""
        self._ensure_exists()
        entries, unparsed = self._scan()
        for line in unparsed:
            logger.warning(
                "Manifest %s has a line that is not '<name> <version>', leaving it as is: %r",
                self.path, line,
            )
        logger.debug("Loaded %d manifest entries from %s", len(entries), self.path)
        return entries

    def find(self, name: str) -> ManifestEntry | None:
        for entry in self.load():
            if entry.name == name:
                return entry
        return None

    # ── Write ───────────────────────────────────────────────────

    def append_install(self, name: str, version: str) -> None:
        """Append one entry.  The caller has already checked it is absent."""
        entry = _checked_entry(name, version, self.path)
        self._ensure_exists()

        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(entry.to_line() + "\n")
                fh.flush()
        except OSError as e:
            logger.error("Failed to append to manifest %s: %s", self.path, e)
            raise ManifestError(f"Cannot write manifest {self.path}: {e}", self.path) from e

        logger.info("Recorded %s %s in manifest", name, version)

    def rewrite(self, entries: Iterable[ManifestEntry]) -> None:
        """Replace the manifest entries with ``entries``, in the given order.

        Lines already on disk that do not parse as an entry are carried
        over unchanged after the entries.
        """
        lines = [_checked_entry(e.name, e.version, self.path).to_line() for e in entries]
        unparsed = self._scan()[1] if self.path.is_file() else []
        content = "".join(line + "\n" for line in [*lines, *unparsed])

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=".manifest_",
                suffix=".tmp",
            )
            tmp = Path(tmp_path)
            owned = False
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    owned = True
                    fh.write(content)
                tmp.replace(self.path)
            except Exception:
                if not owned:
                    os.close(fd)
                tmp.unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Failed to rewrite manifest %s: %s", self.path, e)
            raise ManifestError(f"Cannot write manifest {self.path}: {e}", self.path) from e

        logger.debug(
            "Rewrote manifest %s with %d entries (%d unparsed lines kept)",
            self.path, len(lines), len(unparsed),
        )

    def record(self, name: str, version: str) -> None:
        """Track ``name`` at ``version``.

        Appends when the package is new; otherwise rewrites the manifest
        with the version updated in place.
        """
        entries = self.load()
        for i, entry in enumerate(entries):
            if entry.name == name:
                if entry.version == version:
                    return
                entries[i] = ManifestEntry(name=name, version=version)
                self.rewrite(entries)
                logger.info("Updated %s to %s in manifest", name, version)
                return
        self.append_install(name, version)

    def discard(self, name: str) -> bool:
        """Stop tracking ``name``.  Returns False when it was not tracked."""
        entries = self.load()
        kept = [e for e in entries if e.name != name]
        if len(kept) == len(entries):
            return False
        self.rewrite(kept)
        logger.info("Removed %s from manifest", name)
        return True

    # ── Internals ───────────────────────────────────────────────

    def _scan(self) -> tuple[list[ManifestEntry], list[str]]:
        """Split the file into parsed entries and lines left untouched."""
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read manifest %s: %s", self.path, e)
            raise ManifestError(f"Cannot read manifest {self.path}: {e}", self.path) from e

        entries: list[ManifestEntry] = []
        unparsed: list[str] = []
        for line in raw.splitlines():
            fields = line.split()
            if not fields:
                continue
            if len(fields) > 2:
                unparsed.append(line)
                continue
            version = fields[1] if len(fields) == 2 else ""
            entries.append(ManifestEntry(name=fields[0], version=version))
        return entries, unparsed

    def _ensure_exists(self) -> None:
        if self.path.is_file():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch()
        except OSError as e:
            logger.error("Failed to create manifest %s: %s", self.path, e)
            raise ManifestError(f"Cannot create manifest {self.path}: {e}", self.path) from e
        logger.info("Created empty manifest at %s", self.path)


def _checked_entry(name: str, version: str, path: Path) -> ManifestEntry:
    if not name or any(ch.isspace() for ch in name):
        raise ManifestError(f"Package name {name!r} cannot be stored in the manifest", path)
    if any(ch.isspace() for ch in version):
        raise ManifestError(f"Version {version!r} of {name} cannot be stored in the manifest", path)
    return ManifestEntry(name=name, version=version)
