from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, List, Optional

from packages.postal_core.libpostal_engine import LibpostalEngine
from packages.postal_core.lifecycle import EngineHandle, setup
from packages.postal_core.pipeline import parse_address
from packages.postal_core.result import to_payload
from packages.postal_core.types import Ok
from services.address_api.app.settings import load_settings


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse and normalize postal addresses with libpostal")
    parser.add_argument("addresses", nargs="*", help="Addresses to parse; read from stdin when omitted")
    parser.add_argument("--data-dir", default=None, help="libpostal data directory (default: POSTAL_DATA_DIR)")
    parser.add_argument("--json", action="store_true", help="Print one JSON object per address")
    parser.add_argument("--full-expansions", action="store_true", help="Use full instead of root expansions")
    parser.add_argument("--log-level", default=None, help="Logging level (default: POSTAL_LOG_LEVEL)")
    return parser


def _read_addresses(args: argparse.Namespace, stdin: Iterable[str]) -> List[str]:
    if args.addresses:
        return list(args.addresses)
    return [line.strip() for line in stdin if line.strip()]


def main(argv: Optional[List[str]] = None, handle: Optional[EngineHandle] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, (args.log_level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    expand_root = settings.expand_root and not args.full_expansions
    handle = handle or EngineHandle(LibpostalEngine(root_expansions=expand_root))
    setup_result = setup(handle, args.data_dir or settings.data_dir)
    if not isinstance(setup_result, Ok):
        print(f"[error] {setup_result.message}", file=sys.stderr)
        return 2

    failed = 0
    for address in _read_addresses(args, sys.stdin):
        result = parse_address(handle, address)
        if not isinstance(result, Ok):
            failed += 1
        if args.json:
            print(json.dumps({"address": address, **to_payload(result)}, ensure_ascii=False))
            continue
        if not isinstance(result, Ok):
            print(f"[error] {address}: {result.message}")
            continue
        print(address)
        for item in result.value:
            print(f"  {item.label}: {' | '.join(item.variants)}")
    return 3 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
