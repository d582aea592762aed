"""Top-level entry script for freezing the launcher into a single executable.

Frozen builds report the bundled executable as ``sys.executable``, which the
default locator uses as the installation root anchor.
"""

from mclone_launcher.launcher import main


if __name__ == "__main__":
    raise SystemExit(main())
