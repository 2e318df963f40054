"""zonesync CLI — inspect and reconcile DNS zones from the command line.

Usage examples::

    zonesync --provider azure --config '{"resource_group": "dns"}' records
    zonesync -p azure -f /etc/kubernetes/azure.json --dry-run apply --changes plan.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``zonesync`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="zonesync",
        description="Reconcile planned DNS changes against a cloud DNS zone",
    )
    parser.add_argument(
        "--provider", "-p",
        default="azure",
        choices=["azure"],
        help="DNS provider",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"resource_group":"dns"}\')',
    )
    parser.add_argument(
        "--config-file", "-f",
        type=str,
        default=None,
        help="Path to an azure.json credentials file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log changes without applying them",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("records", help="Print the current records as JSON")
    apply = sub.add_parser("apply", help="Apply a JSON change batch")
    apply.add_argument(
        "--changes",
        required=True,
        help="Path to a JSON document with create/update_new/update_old/delete lists",
    )
    return parser


def _load_config(ns: argparse.Namespace) -> dict[str, Any]:
    from zonesync.base.config import load_azure_config_file

    config: dict[str, Any] = {}
    if ns.config_file:
        config.update(load_azure_config_file(ns.config_file))
    config.update(json.loads(ns.config))
    if ns.dry_run:
        config["dry_run"] = True
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, creates a provider via the factory, and runs the
    requested command.  ``records`` prints endpoints as a JSON list;
    ``apply`` prints ``OK`` once the batch has been applied.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    # Lazy-import to avoid loading the SDKs for --help
    from zonesync.base.logger import zs_logger
    from zonesync.base.plan import Changes
    from zonesync.factory import provider_factory

    if ns.verbose:
        zs_logger.set_level(logging.DEBUG)

    try:
        config = _load_config(ns)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        provider = provider_factory(ns.provider, config)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if ns.command == "records":
        try:
            endpoints = provider.records()
        except Exception as e:
            print(f"Operation failed: {e}", file=sys.stderr)
            sys.exit(1)
        print(json.dumps([ep.model_dump() for ep in endpoints], indent=2))
        return

    try:
        changes = Changes.model_validate_json(Path(ns.changes).read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        print(f"Invalid --changes file: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        provider.apply_changes(changes)
    except Exception as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("OK")


if __name__ == "__main__":
    main()
