"""Command-line interface for addr-lens."""

import argparse
import json
import logging
import sys

import addr_lens
from addr_lens import __version__, get_component, normalize_addr, parse_addr, set_component
from addr_lens.config import EngineConfig
from addr_lens.exceptions import AddressLensError
from addr_lens.schema import COMPONENT_COLUMNS


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="addr-lens",
        description="Parse, normalize and edit postal addresses",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging (default: ADDR_LENS_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"addr-lens {__version__}",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    cmd = commands.add_parser("normalize", help="Normalize addresses")
    cmd.add_argument("addresses", nargs="*", help="Addresses (default: one per stdin line)")

    cmd = commands.add_parser("parse", help="Parse addresses into components")
    cmd.add_argument("addresses", nargs="*", help="Addresses (default: one per stdin line)")

    cmd = commands.add_parser("get", help="Extract one component")
    cmd.add_argument("field", choices=COMPONENT_COLUMNS)
    cmd.add_argument("addresses", nargs="*", help="Addresses (default: one per stdin line)")

    cmd = commands.add_parser("set", help="Replace one component")
    cmd.add_argument("field", choices=COMPONENT_COLUMNS)
    cmd.add_argument("value", help="Replacement value for every address")
    cmd.add_argument("addresses", nargs="*", help="Addresses (default: one per stdin line)")

    args = parser.parse_args(argv)

    try:
        config = EngineConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logging.basicConfig(level="DEBUG" if args.verbose else config.log_level)

    addresses = args.addresses or [line.rstrip("\n") for line in sys.stdin]

    try:
        addr_lens.setup(config=config)
        try:
            if args.command == "parse":
                table = parse_addr(addresses)
                _print_table(addresses, table, as_json=args.json)
                return 0
            if args.command == "normalize":
                values = normalize_addr(addresses)
            elif args.command == "get":
                values = get_component(addresses, args.field)
            else:
                values = set_component(addresses, args.field, args.value)
        finally:
            addr_lens.teardown()
    except AddressLensError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(values, ensure_ascii=False, indent=2))
    else:
        for value in values:
            print(value if value is not None else "-")

    return 0


def _print_table(addresses: list[str], table, *, as_json: bool) -> None:
    """Print parsed components, one block per address."""
    records = [
        {column: value for column, value in row.items() if value is not None}
        for row in table.to_dict(orient="records")
    ]
    if as_json:
        print(json.dumps(records, ensure_ascii=False, indent=2))
        return

    for address, record in zip(addresses, records):
        print()
        print(f"  {address}")
        for column in COMPONENT_COLUMNS:
            display = record.get(column) or "-"
            print(f"    {column + ':':<16} {display}")
    print()


if __name__ == "__main__":
    sys.exit(main())
