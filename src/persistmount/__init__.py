"""Declarative bind-mount configuration for hosts with an ephemeral root."""

from .errors import DuplicateMountError, InvalidPathError, PersistMountError
from .mounts.generator import build_manifest
from .mounts.models import MOUNT_OPTIONS, MountManifest, MountSpec

__all__ = [
    "build_manifest",
    "MountManifest",
    "MountSpec",
    "MOUNT_OPTIONS",
    "PersistMountError",
    "InvalidPathError",
    "DuplicateMountError",
]
