"""Serialize mount manifests for configuration consumers."""

from __future__ import annotations

import json
from typing import Any

from ..nix import INDENT, nix_attrset, nix_list, nix_string
from .models import MountManifest


def manifest_to_dict(manifest: MountManifest) -> dict[str, dict[str, Any]]:
    return {path: spec.to_dict() for path, spec in manifest.items()}


def render_json(manifest: MountManifest, indent: int | None = 2) -> str:
    return json.dumps(manifest_to_dict(manifest), indent=indent)


def nix_file_systems_lines(manifest: MountManifest, attribute: str = "fileSystems") -> list[str]:
    if not manifest:
        return [f"{INDENT}{attribute} = {{ }};"]
    lines: list[str] = []
    for path, spec in manifest.items():
        lines.append(f"{INDENT}{attribute}.{nix_string(path)} = {{")
        lines.append(f"{INDENT * 2}device = {nix_string(spec.device)};")
        lines.append(f"{INDENT * 2}options = {nix_list(spec.options)};")
        lines.append(f"{INDENT}}};")
    return lines


def render_nix(manifest: MountManifest, attribute: str = "fileSystems") -> str:
    """Render the manifest as a NixOS module body assigning ``attribute``."""

    return nix_attrset(nix_file_systems_lines(manifest, attribute))
