"""Configuration models for a host with an ephemeral root."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from ..boot.units import RollbackUnit, SetupDirectoryUnit
from .generator import build_manifest
from .models import MountManifest


# Three octal permission digits, optionally prefixed with 0.
_MODE_PATTERN = re.compile(r"^0?[0-7]{3}$")


class RollbackConfig(BaseModel):
    datasets: list[str] = Field(min_length=1)
    snapshot: str = "blank"
    after: list[str] = Field(default_factory=lambda: ["zfs-import-rpool.service"])
    before: list[str] = Field(default_factory=lambda: ["sysroot.mount"])

    def to_unit(self) -> RollbackUnit:
        return RollbackUnit(
            datasets=tuple(self.datasets),
            snapshot=self.snapshot,
            after=tuple(self.after),
            before=tuple(self.before),
        )


class SetupDirectoryConfig(BaseModel):
    path: str
    owner: str
    group: Optional[str] = None
    mode: Optional[str] = Field(default=None, pattern=_MODE_PATTERN.pattern)
    after: list[str] = Field(default_factory=lambda: ["home.mount"])
    before: list[str] = Field(default_factory=lambda: ["systemd-user-sessions.service"])

    @field_validator("path")
    def _require_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("path must be absolute")
        return value

    @field_validator("mode", mode="before")
    def _coerce_mode(cls, value):
        # YAML reads an unquoted 0700 as the integer 448 and an unquoted 700 as 700.
        if isinstance(value, int) and not isinstance(value, bool):
            mode = format(value, "04o")
            if not _MODE_PATTERN.match(mode):
                raise ValueError(
                    f"mode {value} was read as a decimal integer; quote it or write it with a leading 0, e.g. \"0700\""
                )
            return mode
        return value

    def to_unit(self) -> SetupDirectoryUnit:
        return SetupDirectoryUnit(
            path=self.path,
            owner=self.owner,
            group=self.group,
            mode=self.mode,
            after=tuple(self.after),
            before=tuple(self.before),
        )


class HostConfig(BaseModel):
    persist_root: Optional[str] = None
    directories: list[str] = Field(default_factory=list)
    rollback: Optional[RollbackConfig] = None
    setup_directories: list[SetupDirectoryConfig] = Field(default_factory=list)

    @field_validator("persist_root")
    def _validate_root(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.startswith("/"):
            raise ValueError("persist_root must be an absolute path")
        return value

    @field_validator("directories")
    def _validate_directories(cls, value: list[str]) -> list[str]:
        for entry in value:
            if not entry.startswith("/"):
                raise ValueError(f"directory must start with '/': {entry!r}")
        return value

    @model_validator(mode="after")
    def _unique_setup_paths(self) -> "HostConfig":
        paths = [entry.path for entry in self.setup_directories]
        if len(paths) != len(set(paths)):
            raise ValueError("setup_directories must not repeat a path")
        return self

    def resolved_persist_root(self, default: str, override: Optional[str] = None) -> str:
        """Pick the persist root: explicit override, then this config, then ``default``."""

        return override or self.persist_root or default

    def build_manifest(
        self,
        default_root: str,
        *,
        override: Optional[str] = None,
        strict_duplicates: bool = False,
    ) -> MountManifest:
        return build_manifest(
            self.resolved_persist_root(default_root, override),
            self.directories,
            strict_duplicates=strict_duplicates,
        )

    def rollback_unit(self) -> Optional[RollbackUnit]:
        if self.rollback is None:
            return None
        return self.rollback.to_unit()

    def setup_units(self) -> list[SetupDirectoryUnit]:
        return [entry.to_unit() for entry in self.setup_directories]


def load_config(path: Path) -> HostConfig:
    data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        data = {}
    # Non-mapping documents fall through to model_validate and fail validation there.
    if isinstance(data, dict) and isinstance(data.get("persistmount"), dict):
        data = data["persistmount"]
    return HostConfig.model_validate(data)
