"""Synchronous spawn of the bundled interpreter."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Sequence

from mclone_launcher.environment import to_mapping
from mclone_launcher.errors import SpawnError

log = logging.getLogger(__name__)


def exit_status(returncode: int) -> int:
    """Map a ``subprocess`` return code to a process exit status.

    A negative code means the child was killed by that signal; report it the
    way a POSIX shell does.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def spawn(argv: Sequence[str], env: Sequence[str]) -> int:
    """Run ``argv[0]`` with ``argv`` and ``env``, block until it exits, return its status.

    Raises ``SpawnError`` if the child never starts. There is no retry,
    and a started child is never cancelled.
    """
    if not argv:
        raise SpawnError("Empty child command line")
    image = argv[0]
    if not os.path.isfile(image):
        raise SpawnError(f"Interpreter not found: {image}")

    log.debug("Spawning %s with %d argument(s)", image, len(argv) - 1)
    try:
        proc = subprocess.Popen(list(argv), env=to_mapping(env))
    except PermissionError as e:
        raise SpawnError(f"Interpreter is not executable: {image} ({e})") from e
    except OSError as e:
        raise SpawnError(f"Failed to start {image}: {e}") from e

    # Ctrl+C reaches the child too; it decides how to stop, we keep waiting.
    while proc.returncode is None:
        try:
            proc.wait()
        except KeyboardInterrupt:
            log.debug("Interrupted; still waiting for %s", image)

    log.debug("Child %s exited with return code %d", image, proc.returncode)
    return exit_status(proc.returncode)
