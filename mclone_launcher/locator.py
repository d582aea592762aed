"""Self-location of the launcher executable.

Two interchangeable strategies produce the path of the running launcher; both
share the same filename stripping and separator normalization, so the
installation root is always an absolute, forward-slash directory path.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Dict, Optional, Sequence, Type

from mclone_launcher.errors import LocatorError

log = logging.getLogger(__name__)

SEPARATORS = ("\\", "/")


def normalize_separators(path: str) -> str:
    """Rewrite every backslash separator to a forward slash. Idempotent."""
    return path.replace("\\", "/")


def strip_filename(path: str) -> str:
    """Drop the trailing file name, keeping the containing directory.

    Raises ``LocatorError`` if there is no separator to strip at.
    """
    if not path:
        raise LocatorError("Executable path is empty")
    idx = max(path.rfind(sep) for sep in SEPARATORS)
    if idx < 0:
        raise LocatorError(f"Executable path has no directory component: {path!r}")
    if idx == 0:
        return path[0]
    return path[:idx]


class Locator:
    """Derives the installation root from the launcher's own path."""

    name = ""

    def executable_path(self, argv: Sequence[str]) -> str:
        raise NotImplementedError

    def locate(self, argv: Sequence[str]) -> str:
        exe = self.executable_path(argv)
        log.debug("%s locator: executable path %s", self.name, exe)
        return normalize_separators(strip_filename(exe))


class ExecutableLocator(Locator):
    """Asks the running process for its own image path.

    Frozen builds report the launcher binary as ``sys.executable``; a plain
    install runs as a script under an interpreter, so the script is the image.
    Console-script ``.exe`` wrappers and zipapps run ``__main__.py`` from inside
    an archive, in which case the archive file is the image.
    """

    name = "executable"

    def __init__(self, main_file: Optional[str] = None, frozen: Optional[bool] = None):
        self._main_file = main_file
        self._frozen = frozen

    def executable_path(self, argv: Sequence[str]) -> str:
        frozen = getattr(sys, "frozen", False) if self._frozen is None else self._frozen
        if frozen:
            image = sys.executable
            if not image:
                raise LocatorError("Running executable path could not be determined")
            return os.path.realpath(image)
        script = self._main_file or getattr(sys.modules.get("__main__"), "__file__", None)
        if not script:
            raise LocatorError("Running script path could not be determined (no __main__.__file__)")
        return archive_image(os.path.realpath(script))


def archive_image(path: str) -> str:
    """Return the nearest ancestor of ``path`` that is a regular file, else ``path``.

    ``/Scripts/mclone.exe/__main__.py`` lives inside the ``mclone.exe`` archive.
    """
    candidate = path
    while True:
        if os.path.isfile(candidate):
            return candidate
        parent = os.path.dirname(candidate)
        if parent == candidate:
            return path
        candidate = parent


class ArgvLocator(Locator):
    """Trusts the invocation path the calling shell put in ``argv[0]``."""

    name = "argv"

    def executable_path(self, argv: Sequence[str]) -> str:
        if not argv or not argv[0]:
            raise LocatorError("Invocation path (argv[0]) is missing")
        invoked = argv[0]
        if not any(sep in invoked for sep in SEPARATORS):
            raise LocatorError(f"Invocation path has no directory component: {invoked!r}")
        if _is_windows_absolute(invoked):
            return invoked
        return os.path.abspath(invoked)


def _is_windows_absolute(path: str) -> bool:
    return len(path) > 2 and path[1] == ":" and path[2] in SEPARATORS


LOCATORS: Dict[str, Type[Locator]] = {
    ExecutableLocator.name: ExecutableLocator,
    ArgvLocator.name: ArgvLocator,
}


def get_locator(name: str) -> Locator:
    try:
        return LOCATORS[name]()
    except KeyError:
        raise LocatorError(f"Unknown locator strategy: {name!r}") from None
