"""Service declarations for the external rollback and setup steps.

Nothing here runs a command. The units describe work that the service
manager performs at boot: the initrd rollback of the ephemeral datasets to
their empty snapshot, and the per-directory setup that restores ownership
once the home volume is mounted.
"""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..errors import InvalidPathError
from ..nix import INDENT, nix_attr_name, nix_attrset, nix_indented_string, nix_list, nix_string


_DATASET_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:/-]*$")
_MODE_RE = re.compile(r"^0?[0-7]{3}$")


@dataclass(frozen=True, slots=True)
class RollbackUnit:
    datasets: tuple[str, ...]
    snapshot: str = "blank"
    after: tuple[str, ...] = ("zfs-import-rpool.service",)
    before: tuple[str, ...] = ("sysroot.mount",)
    wanted_by: tuple[str, ...] = ("initrd.target",)
    name: str = "rollback"

    def __post_init__(self) -> None:
        if not self.datasets:
            raise InvalidPathError("rollback requires at least one dataset")
        for dataset in self.datasets:
            if not _DATASET_RE.match(dataset) or dataset.endswith("/"):
                raise InvalidPathError(f"invalid dataset name: {dataset!r}")
        if not self.snapshot or not _DATASET_RE.match(self.snapshot) or "/" in self.snapshot:
            raise InvalidPathError(f"invalid snapshot name: {self.snapshot!r}")

    def commands(self) -> list[str]:
        # Rolling back an already blank dataset is a no-op.
        return [f"zfs rollback -r {dataset}@{self.snapshot}" for dataset in self.datasets]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": "Roll back ephemeral datasets to an empty snapshot",
            "wantedBy": list(self.wanted_by),
            "after": list(self.after),
            "before": list(self.before),
            "unitConfig": {"DefaultDependencies": "no"},
            "serviceConfig": {"Type": "oneshot"},
            "script": self.commands(),
        }


@dataclass(frozen=True, slots=True)
class SetupDirectoryUnit:
    path: str
    owner: str
    group: Optional[str] = None
    mode: Optional[str] = None
    after: tuple[str, ...] = ("home.mount",)
    before: tuple[str, ...] = ("systemd-user-sessions.service",)
    wanted_by: tuple[str, ...] = ("multi-user.target",)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.path or not self.path.startswith("/"):
            raise InvalidPathError(f"setup directory must be absolute: {self.path!r}")
        if not self.owner:
            raise InvalidPathError(f"setup directory {self.path} needs an owner")
        if self.mode is not None and not _MODE_RE.match(self.mode):
            raise InvalidPathError(f"invalid mode for {self.path}: {self.mode!r}")
        if not self.name:
            object.__setattr__(self, "name", unit_name_for(self.path))

    def commands(self) -> list[str]:
        target = shlex.quote(self.path)
        ownership = self.owner if self.group is None else f"{self.owner}:{self.group}"
        commands = [f"mkdir -p {target}", f"chown {shlex.quote(ownership)} {target}"]
        if self.mode is not None:
            commands.append(f"chmod {self.mode} {target}")
        return commands

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": f"Prepare {self.path} after root rollback",
            "wantedBy": list(self.wanted_by),
            "after": list(self.after),
            "before": list(self.before),
            "serviceConfig": {"Type": "oneshot"},
            "script": self.commands(),
        }


def unit_name_for(path: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "-", path).strip("-") or "root"
    return f"persistmount-setup-{slug}"


def boot_units_to_dict(
    rollback: Optional[RollbackUnit],
    setup_directories: Sequence[SetupDirectoryUnit] = (),
) -> dict[str, Any]:
    return {
        "rollback": rollback.to_dict() if rollback is not None else None,
        "setupDirectories": [unit.to_dict() for unit in setup_directories],
    }


def _service_lines(prefix: str, payload: dict[str, Any], script: list[str]) -> list[str]:
    inner = INDENT * 2
    lines = [f"{INDENT}{prefix} = {{"]
    lines.append(f"{inner}description = {nix_string(payload['description'])};")
    lines.append(f"{inner}wantedBy = {nix_list(payload['wantedBy'])};")
    lines.append(f"{inner}after = {nix_list(payload['after'])};")
    lines.append(f"{inner}before = {nix_list(payload['before'])};")
    for key, value in payload.get("unitConfig", {}).items():
        lines.append(f"{inner}unitConfig.{key} = {nix_string(value)};")
    for key, value in payload["serviceConfig"].items():
        lines.append(f"{inner}serviceConfig.{key} = {nix_string(value)};")
    lines.append(f"{inner}script = {nix_indented_string(script, depth=2)};")
    lines.append(f"{INDENT}}};")
    return lines


def boot_units_nix_lines(
    rollback: Optional[RollbackUnit],
    setup_directories: Sequence[SetupDirectoryUnit] = (),
) -> list[str]:
    lines: list[str] = []
    if rollback is not None:
        lines.append(f"{INDENT}boot.initrd.systemd.enable = true;")
        lines.extend(
            _service_lines(
                f"boot.initrd.systemd.services.{nix_attr_name(rollback.name)}",
                rollback.to_dict(),
                rollback.commands(),
            )
        )
    for unit in setup_directories:
        lines.extend(
            _service_lines(
                f"systemd.services.{nix_attr_name(unit.name)}",
                unit.to_dict(),
                unit.commands(),
            )
        )
    return lines


def render_boot_units_nix(
    rollback: Optional[RollbackUnit],
    setup_directories: Sequence[SetupDirectoryUnit] = (),
) -> str:
    return nix_attrset(boot_units_nix_lines(rollback, setup_directories))
