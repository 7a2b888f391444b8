"""Allow ``python -m persistmount`` as an alias for the ``persistmount`` CLI."""

from .mounts.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
