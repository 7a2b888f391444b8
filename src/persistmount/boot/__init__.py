"""Declarations for the boot-time rollback and setup services."""

from .units import RollbackUnit, SetupDirectoryUnit, boot_units_to_dict, render_boot_units_nix

__all__ = [
    "RollbackUnit",
    "SetupDirectoryUnit",
    "boot_units_to_dict",
    "render_boot_units_nix",
]
