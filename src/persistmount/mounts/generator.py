"""Build bind-mount manifests for paths kept across root resets."""

from __future__ import annotations

from typing import Iterable

import structlog

from ..errors import DuplicateMountError, InvalidPathError
from .models import MOUNT_OPTIONS, MountManifest, MountSpec


LOGGER = structlog.get_logger("persistmount.mounts.generator")


def _require_absolute(value: object, what: str) -> str:
    if not isinstance(value, str):
        raise InvalidPathError(f"{what} must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidPathError(f"{what} must not be empty")
    if not value.startswith("/"):
        raise InvalidPathError(f"{what} must start with '/': {value!r}")
    return value


def build_manifest(
    persist_root: str,
    relative_paths: Iterable[str],
    *,
    strict_duplicates: bool = False,
) -> MountManifest:
    """Map each path to a bind mount sourced from ``persist_root``.

    The device is the plain string concatenation of the root and the path.
    Nothing is normalized: ``..`` segments and doubled separators pass
    through untouched, because the consuming configuration compares the
    strings verbatim.

    A path listed twice keeps its last entry and logs
    ``duplicate_mount_target``. With ``strict_duplicates`` the repeat raises
    :class:`DuplicateMountError` instead.
    """

    root = _require_absolute(persist_root, "persist root")
    manifest: MountManifest = {}
    for index, path in enumerate(relative_paths):
        target = _require_absolute(path, f"mount target #{index}")
        if target in manifest:
            if strict_duplicates:
                raise DuplicateMountError(target)
            LOGGER.warning("duplicate_mount_target", path=target, index=index)
        manifest[target] = MountSpec(device=root + target, options=MOUNT_OPTIONS)
    return manifest
