import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from mclone_launcher.command import BundleLayout
from mclone_launcher.environment import EnvPolicy
from mclone_launcher.errors import ConfigError
from mclone_launcher.locator import LOCATORS


CONFIG_ENV_VAR = "MCLONE_LAUNCHER_CONFIG"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class LauncherConfig:
    locator: str = "executable"
    diagnostics: bool = False
    env_policy: EnvPolicy = EnvPolicy.PREPEND
    log_level: str = "WARNING"
    interpreter: str = BundleLayout.interpreter
    sub_tool: str = BundleLayout.sub_tool
    helper: str = BundleLayout.helper
    helper_env_var: str = BundleLayout.helper_env_var

    def layout(self) -> BundleLayout:
        return BundleLayout(
            interpreter=self.interpreter,
            sub_tool=self.sub_tool,
            helper=self.helper,
            helper_env_var=self.helper_env_var,
        )

    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING


def _bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return default


def _choice(value: Any, key: str, allowed) -> str:
    val = str(value).strip().lower()
    if val not in allowed:
        raise ConfigError(f"{key} must be one of: {', '.join(sorted(allowed))} (got {value!r})")
    return val


def _relpath(data: Mapping[str, Any], key: str, default: str) -> str:
    val = str(data.get(key) or default).strip().replace("\\", "/").strip("/")
    if not val:
        raise ConfigError(f"Empty bundle path for config key: {key}")
    return val


def load_launcher_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> LauncherConfig:
    """Build the launcher config from an optional JSON file plus environment overrides.

    Without an explicit path and without ``MCLONE_LAUNCHER_CONFIG`` the built-in
    defaults apply. A named file that does not exist is an error.
    """
    env = os.environ if environ is None else environ
    data: dict = {}

    cfg_name = path or env.get(CONFIG_ENV_VAR)
    if cfg_name:
        cfg_path = Path(cfg_name).expanduser().resolve()
        if not cfg_path.exists():
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Malformed config file {cfg_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {cfg_path} must contain a JSON object")

    locator = env.get("MCLONE_LAUNCHER_LOCATOR") or data.get("locator") or "executable"
    policy = env.get("MCLONE_LAUNCHER_ENV_POLICY") or data.get("env_policy") or EnvPolicy.PREPEND.value
    diagnostics = env.get("MCLONE_LAUNCHER_DIAGNOSTICS", data.get("diagnostics", False))
    log_level = env.get("MCLONE_LAUNCHER_LOG_LEVEL") or data.get("log_level") or "WARNING"

    helper_env_var = str(data.get("helper_env_var") or BundleLayout.helper_env_var).strip()
    if not helper_env_var or "=" in helper_env_var:
        raise ConfigError(f"Invalid helper_env_var: {helper_env_var!r}")

    return LauncherConfig(
        locator=_choice(locator, "locator", set(LOCATORS)),
        diagnostics=_bool(diagnostics, False),
        env_policy=EnvPolicy(_choice(policy, "env_policy", {p.value for p in EnvPolicy})),
        log_level=str(log_level).strip().upper() or "WARNING",
        interpreter=_relpath(data, "interpreter", BundleLayout.interpreter),
        sub_tool=_relpath(data, "sub_tool", BundleLayout.sub_tool),
        helper=_relpath(data, "helper", BundleLayout.helper),
        helper_env_var=helper_env_var,
    )
