"""mclone launcher entry point.

Locates the installation root, builds the interpreter command line and the
child environment, then runs the bundled tool and relays its exit status.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Mapping, Optional, Sequence

from mclone_launcher import diagnostics
from mclone_launcher.command import build_child_argv
from mclone_launcher.config import LauncherConfig, load_launcher_config
from mclone_launcher.environment import build_child_env
from mclone_launcher.errors import LauncherError, SpawnError
from mclone_launcher.locator import Locator, get_locator
from mclone_launcher.spawner import spawn

log = logging.getLogger(__name__)

EXIT_SPAWN_FAILURE = 127
EXIT_LAUNCHER_FAILURE = 70
LOG_FORMAT = "mclone: %(levelname)s %(name)s: %(message)s"


def run(
    argv: Sequence[str],
    environ: Mapping[str, str],
    config: LauncherConfig,
    locator: Optional[Locator] = None,
) -> int:
    """Run the pipeline once and return the child's exit status.

    Launcher failures propagate as ``LauncherError`` subclasses.
    """
    loc = locator or get_locator(config.locator)
    root = loc.locate(argv)
    log.debug("Installation root: %s", root)

    layout = config.layout()
    child_argv = build_child_argv(root, argv, layout)
    child_env = build_child_env(root, environ, layout, config.env_policy)

    if config.diagnostics:
        diagnostics.dump(root, child_argv, child_env)

    return spawn(child_argv, child_env)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv if argv is None else argv)
    try:
        config = load_launcher_config()
    except (LauncherError, OSError) as e:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
        log.error("Launcher configuration failed: %s", e)
        return EXIT_LAUNCHER_FAILURE

    logging.basicConfig(level=config.log_level_value(), format=LOG_FORMAT)

    try:
        return run(args, os.environ, config)
    except SpawnError as e:
        log.error("Spawn failed: %s", e)
        return EXIT_SPAWN_FAILURE
    except LauncherError as e:
        log.error("Launcher failed: %s", e)
        return EXIT_LAUNCHER_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
