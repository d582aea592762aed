from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from mclone_launcher.errors import LauncherError

log = logging.getLogger(__name__)


def join_root(root: str, relpath: str) -> str:
    return f"{root.rstrip('/')}/{relpath}"


@dataclass(frozen=True)
class BundleLayout:
    """Where the bundled components live relative to the installation root."""

    interpreter: str = "ruby/bin/ruby.exe"
    sub_tool: str = "ruby/bin/mclone"
    helper: str = "rclone/rclone.exe"
    helper_env_var: str = "RCLONE"

    def interpreter_path(self, root: str) -> str:
        return join_root(root, self.interpreter)

    def sub_tool_path(self, root: str) -> str:
        return join_root(root, self.sub_tool)

    def helper_path(self, root: str) -> str:
        return join_root(root, self.helper)


def build_child_argv(root: str, argv: Sequence[str], layout: BundleLayout = BundleLayout()) -> List[str]:
    """Interpreter, sub-tool, then ``argv[1:]`` verbatim.

    ``argv[0]`` (the launcher's own invocation path) is replaced, so the result
    is always one element longer than ``argv``.
    """
    if not argv:
        raise LauncherError("argv must contain at least the invocation path")
    child = [layout.interpreter_path(root), layout.sub_tool_path(root)]
    child.extend(argv[1:])
    log.debug("Child argv: %d element(s), %d forwarded", len(child), len(argv) - 1)
    return child
