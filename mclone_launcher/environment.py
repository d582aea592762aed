"""Child environment composition.

The environment is kept as an ordered list of ``KEY=VALUE`` entries, the way a
native ``envp`` array is laid out; ``to_mapping`` adapts it for ``subprocess``
only at the spawn boundary.
"""

from __future__ import annotations

import enum
import logging
import os
from typing import Dict, List, Mapping, Sequence, Union

from mclone_launcher.command import BundleLayout
from mclone_launcher.errors import EnvironmentConflictError

log = logging.getLogger(__name__)

ParentEnv = Union[Mapping[str, str], Sequence[str]]


class EnvPolicy(str, enum.Enum):
    """What to do when the parent already defines the helper variable."""

    PREPEND = "prepend"
    OVERRIDE = "override"
    DEFER = "defer"
    ERROR = "error"


def _entries(parent_env: ParentEnv) -> List[str]:
    if isinstance(parent_env, Mapping):
        return [f"{k}={v}" for k, v in parent_env.items()]
    return list(parent_env)


def entry_key(entry: str) -> str:
    return entry.split("=", 1)[0]


def _same_key(a: str, b: str, case_insensitive: bool) -> bool:
    return a.upper() == b.upper() if case_insensitive else a == b


def build_child_env(
    root: str,
    parent_env: ParentEnv,
    layout: BundleLayout = BundleLayout(),
    policy: EnvPolicy = EnvPolicy.PREPEND,
    case_insensitive: bool = os.name == "nt",
) -> List[str]:
    """Helper-binary entry followed by a copy of the parent environment.

    The parent environment itself is never modified.
    """
    key = layout.helper_env_var
    injected = f"{key}={layout.helper_path(root)}"
    inherited = _entries(parent_env)
    clashes = [e for e in inherited if _same_key(entry_key(e), key, case_insensitive)]

    if clashes:
        log.info("Parent environment already defines %s; applying policy %r", key, policy.value)
        if policy is EnvPolicy.ERROR:
            raise EnvironmentConflictError(f"{key} is already set in the parent environment")
        if policy is EnvPolicy.DEFER:
            return inherited
        if policy is EnvPolicy.OVERRIDE:
            inherited = [e for e in inherited if e not in clashes]

    return [injected] + inherited


def to_mapping(entries: Sequence[str], case_insensitive: bool = os.name == "nt") -> Dict[str, str]:
    """Adapt ``KEY=VALUE`` entries for ``subprocess``; the first entry for a key wins."""
    env: Dict[str, str] = {}
    seen = set()
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            log.warning("Skipping malformed environment entry %r", entry)
            continue
        norm = key.upper() if case_insensitive else key
        if norm in seen:
            continue
        seen.add(norm)
        env[key] = value
    return env
