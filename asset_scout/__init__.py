# asset_scout/__init__.py
"""
AssetScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

# Expose CLI entry point; `asset_scout.cli` stays the submodule
from .cli import cli as main_cli  # noqa: E402
