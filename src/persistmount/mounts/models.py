"""Mount manifest data types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Bind the persisted copy into place and keep it out of file manager sidebars.
MOUNT_OPTIONS: tuple[str, ...] = ("bind", "x-gvfs-hide")


@dataclass(frozen=True, slots=True)
class MountSpec:
    device: str
    options: tuple[str, ...] = MOUNT_OPTIONS

    def to_dict(self) -> dict[str, Any]:
        return {"device": self.device, "options": list(self.options)}


MountManifest = dict[str, MountSpec]
