"""Exception types raised by persistmount."""

from __future__ import annotations


class PersistMountError(Exception):
    """Base class for persistmount failures."""


class InvalidPathError(PersistMountError, ValueError):
    """Raised when a persist root or mount target is malformed."""


class DuplicateMountError(PersistMountError, ValueError):
    """Raised in strict mode when the same mount target is listed twice."""

    def __init__(self, path: str) -> None:
        super().__init__(f"mount target listed more than once: {path}")
        self.path = path
