"""Helpers for emitting Nix expression fragments."""

from __future__ import annotations

import re
from typing import Iterable


INDENT = "  "

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_'-]*$")


def nix_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("${", "\\${")
    escaped = escaped.replace("\n", "\\n").replace("\t", "\\t")
    return f'"{escaped}"'


def nix_attr_name(value: str) -> str:
    if _IDENTIFIER_RE.match(value):
        return value
    return nix_string(value)


def nix_list(values: Iterable[str]) -> str:
    items = [nix_string(value) for value in values]
    if not items:
        return "[ ]"
    return "[ " + " ".join(items) + " ]"


def nix_indented_string(lines: Iterable[str], depth: int) -> str:
    """Render ``lines`` as a Nix ``''`` string indented to ``depth`` levels."""

    pad = INDENT * (depth + 1)
    body = []
    for line in lines:
        escaped = line.replace("''", "'''").replace("${", "''${")
        body.append(f"{pad}{escaped}")
    closing = INDENT * depth
    return "''\n" + "\n".join(body) + f"\n{closing}''"


def nix_attrset(body_lines: list[str]) -> str:
    """Wrap already indented attribute lines into a top-level attribute set."""

    if not body_lines:
        return "{ }\n"
    return "{\n" + "\n".join(body_lines) + "\n}\n"
