"""Parse or normalize the address column of a CSV file.

Usage:
  PYTHONPATH=src python scripts/process_address_csv.py addresses.csv \
    --column address --mode parse --output parsed.csv

Ctrl-C stops the run at the next 10,000-row checkpoint without writing output.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import addr_lens  # noqa: E402
from addr_lens.exceptions import AddressLensError, BatchCancelledError  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse or normalize an address column")
    parser.add_argument("input", help="Input CSV path")
    parser.add_argument("--column", default="address", help="Address column (default: address)")
    parser.add_argument(
        "--mode",
        choices=("parse", "normalize"),
        default="parse",
        help="parse: add one column per component; normalize: add <column>_normalized",
    )
    parser.add_argument("--output", required=True, help="Output CSV path")
    return parser.parse_args(argv)


def process(frame: pd.DataFrame, column: str, mode: str, cancel_event: threading.Event) -> pd.DataFrame:
    if column not in frame.columns:
        raise KeyError(f"column not found: {column}")
    addresses = frame[column]
    if mode == "normalize":
        result = frame.copy()
        result[f"{column}_normalized"] = addr_lens.normalize_addr(addresses, cancel_event=cancel_event)
        return result
    parsed = addr_lens.parse_addr(addresses, cancel_event=cancel_event)
    return frame.join(parsed, rsuffix="_parsed")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    cancel_event = threading.Event()
    previous_handler = signal.signal(signal.SIGINT, lambda *_: cancel_event.set())

    frame = pd.read_csv(args.input, dtype=str)
    try:
        addr_lens.setup()
        try:
            result = process(frame, args.column, args.mode, cancel_event)
        finally:
            addr_lens.teardown()
    except BatchCancelledError as exc:
        print(f"interrupted: {exc}", file=sys.stderr)
        return 130
    except (AddressLensError, KeyError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    result.to_csv(output, index=False)
    logger.info("written %d rows: %s", len(result), output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
