"""
Shell command runner — the single place hone calls ``subprocess.run``.

Every external tool (git, makepkg, pacman) goes through ``run_command``.
It never raises: a command that cannot be spawned or exits nonzero comes
back as a failed Receipt.  The working directory is always passed
explicitly; the process cwd is never changed.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path

from hone.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


def run_command(
    args: list[str],
    *,
    cwd: Path | str | None = None,
    interactive: bool = False,
) -> Receipt:
    """Run a command and return a receipt.

    Args:
        args: Command and arguments (no shell).
        cwd: Working directory for the command.
        interactive: Inherit the terminal instead of capturing output.
            Used for anything that may prompt (sudo, pacman, makepkg).

    Returns:
        Receipt with status ``ok`` on exit code 0, ``failed`` otherwise.
    """
    logger.debug("Executing: %s (cwd=%s)", " ".join(args), cwd)
    start = time.monotonic()

    try:
        result = subprocess.run(
            args,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=not interactive,
            text=True,
        )
    except OSError as e:
        logger.warning("Cannot run %s: %s", args[0] if args else "<empty>", e)
        return Receipt.failure(
            command=args,
            error=f"Command execution error: {e}",
            metadata={"spawn_failed": True},
        )

    elapsed_ms = int((time.monotonic() - start) * 1000)
    output = (result.stdout or "").strip()
    stderr = (result.stderr or "").strip()

    if result.returncode == 0:
        return Receipt.success(
            command=args,
            output=output,
            return_code=0,
            duration_ms=elapsed_ms,
            metadata={"stderr": stderr} if stderr else {},
        )

    logger.debug("%s exited with %d", args[0], result.returncode)
    return Receipt.failure(
        command=args,
        error=stderr or f"Command exited with code {result.returncode}",
        output=output,
        return_code=result.returncode,
        duration_ms=elapsed_ms,
    )
