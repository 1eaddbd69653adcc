"""Sous-package CLI commands - re-exporte les commandes publiques."""

from medialens.adapters.cli.commands.quality_commands import (
    analyze,
    report,
)
from medialens.adapters.cli.commands.scan_commands import (
    scan,
)
from medialens.adapters.cli.commands.settings_commands import (
    map_path,
    nfs_mount,
    set_threshold,
    thresholds,
)

__all__ = [
    # scan
    "scan",
    # quality
    "analyze",
    "report",
    # settings
    "thresholds",
    "set_threshold",
    "map_path",
    "nfs_mount",
]
