"""Persisted bind-mount manifests."""

from .config import HostConfig, RollbackConfig, SetupDirectoryConfig
from .generator import build_manifest
from .models import MOUNT_OPTIONS, MountManifest, MountSpec
from .render import manifest_to_dict, render_json, render_nix

__all__ = [
    "build_manifest",
    "HostConfig",
    "RollbackConfig",
    "SetupDirectoryConfig",
    "MountManifest",
    "MountSpec",
    "MOUNT_OPTIONS",
    "manifest_to_dict",
    "render_json",
    "render_nix",
]
