"""CLI entrypoint for generating persisted mount configuration."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from ..boot.units import boot_units_nix_lines, boot_units_to_dict
from ..common.observability import configure_logging
from ..common.settings import PersistMountSettings
from ..errors import PersistMountError
from ..nix import nix_attrset
from .config import HostConfig, load_config
from .render import manifest_to_dict, nix_file_systems_lines, render_json


LOGGER = structlog.get_logger("persistmount.mounts.cli")


def render_document(
    config: HostConfig,
    settings: PersistMountSettings,
    output_format: str,
    *,
    with_boot_units: bool = False,
    persist_root: str | None = None,
) -> str:
    manifest = config.build_manifest(settings.persist_root, override=persist_root)
    rollback = config.rollback_unit() if with_boot_units else None
    setup_units = config.setup_units() if with_boot_units else []

    if output_format == "nix":
        lines = nix_file_systems_lines(manifest)
        if with_boot_units:
            lines.extend(boot_units_nix_lines(rollback, setup_units))
        return nix_attrset(lines)

    if not with_boot_units:
        return render_json(manifest) + "\n"
    payload: dict[str, Any] = {
        "fileSystems": manifest_to_dict(manifest),
        **boot_units_to_dict(rollback, setup_units),
    }
    return json.dumps(payload, indent=2) + "\n"


def render_command(args: argparse.Namespace, settings: PersistMountSettings) -> int:
    config = load_config(Path(args.config))
    output_format = args.format or settings.output_format
    document = render_document(
        config,
        settings,
        output_format,
        with_boot_units=args.with_boot_units,
        persist_root=args.persist_root,
    )
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(document, encoding="utf-8")
        LOGGER.info("manifest_written", path=str(output_path), format=output_format)
    else:
        sys.stdout.write(document)
    return 0


def check_command(args: argparse.Namespace, settings: PersistMountSettings) -> int:
    config = load_config(Path(args.config))
    manifest = config.build_manifest(settings.persist_root, strict_duplicates=args.strict)
    config.rollback_unit()
    config.setup_units()
    print(f"ok: {len(manifest)} persisted mounts, {len(config.setup_directories)} setup directories")
    return 0


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate bind mounts for an ephemeral root filesystem")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render the mount manifest for a host")
    render_parser.add_argument("--config", required=True, help="Path to host YAML configuration")
    render_parser.add_argument("--format", choices=["json", "nix"], help="Output format (default from settings)")
    render_parser.add_argument("--output", help="Write to this file instead of stdout")
    render_parser.add_argument("--persist-root", help="Override the persist root from configuration")
    render_parser.add_argument(
        "--with-boot-units",
        action="store_true",
        help="Include the rollback and setup service declarations",
    )

    check_parser = subparsers.add_parser("check", help="Validate a host configuration")
    check_parser.add_argument("--config", required=True, help="Path to host YAML configuration")
    check_parser.add_argument("--strict", action="store_true", help="Treat repeated directories as errors")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    settings = PersistMountSettings()
    configure_logging("persistmount", settings.log_level, settings.log_format)
    try:
        if args.command == "render":
            return render_command(args, settings)
        if args.command == "check":
            return check_command(args, settings)
    except (PersistMountError, ValidationError) as exc:
        LOGGER.error("config_invalid", command=args.command, config=args.config, error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    raise ValueError(f"unknown command {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
