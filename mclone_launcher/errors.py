"""Launcher error hierarchy.

Only the entry point turns these into exit codes; everything below it raises.
"""


class LauncherError(RuntimeError):
    """Base error for all launcher failures."""


class ConfigError(LauncherError):
    """Invalid launcher configuration value."""


class LocatorError(LauncherError):
    """The installation root could not be derived from the executable path."""


class EnvironmentConflictError(LauncherError):
    """The parent environment already defines the injected helper variable."""


class SpawnError(LauncherError):
    """The bundled interpreter could not be started."""
