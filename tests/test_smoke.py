"""
Smoke tests for the mclone launcher.

These tests verify packaging and structural invariants without spawning
anything. Safe to run anytime.

Run: python -m pytest tests/ -v
"""

import importlib
import pathlib
import sys

import pytest

# Ensure repo root is on path
REPO_ROOT = pathlib.Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT))


# ─── Module imports ────────────────────────────────────────────

class TestModuleImports:
    """Every module must import without side effects."""

    MODULES = [
        "mclone_launcher",
        "mclone_launcher.errors",
        "mclone_launcher.config",
        "mclone_launcher.locator",
        "mclone_launcher.command",
        "mclone_launcher.environment",
        "mclone_launcher.spawner",
        "mclone_launcher.diagnostics",
        "mclone_launcher.launcher",
        "launcher_shim",
    ]

    @pytest.mark.parametrize("module_name", MODULES)
    def test_import(self, module_name):
        """Module imports without error."""
        mod = importlib.import_module(module_name)
        assert mod is not None


# ─── Version invariant ──────────────────────────────────────────

class TestVersionInvariant:
    """Package version and pyproject.toml must be in sync."""

    def test_version_matches_pyproject(self):
        from mclone_launcher import __version__
        pyproject = (REPO_ROOT / "pyproject.toml").read_text(encoding="utf-8")
        assert f'version = "{__version__}"' in pyproject

    def test_version_is_semver(self):
        from mclone_launcher import __version__
        parts = __version__.split(".")
        assert len(parts) == 3, f"Not semver: {__version__}"
        assert all(p.isdigit() for p in parts), f"Not numeric: {__version__}"


# ─── Structural invariants ──────────────────────────────────────

class TestStructuralInvariants:
    """Key files must exist."""

    REQUIRED_FILES = [
        "pyproject.toml",
        "launcher_shim.py",
        "mclone_launcher/__init__.py",
        "mclone_launcher/__main__.py",
        "mclone_launcher/launcher.py",
    ]

    @pytest.mark.parametrize("path", REQUIRED_FILES)
    def test_file_exists(self, path):
        assert (REPO_ROOT / path).exists(), f"Missing: {path}"

    def test_launcher_stays_small(self):
        """The launcher is a thin relay; no module should grow past 200 lines."""
        for py_file in (REPO_ROOT / "mclone_launcher").rglob("*.py"):
            lines = len(py_file.read_text(encoding="utf-8").splitlines())
            assert lines <= 200, f"{py_file.relative_to(REPO_ROOT)}: {lines} lines > 200 limit"
