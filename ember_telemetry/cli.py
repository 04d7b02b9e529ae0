#!/usr/bin/env python3
"""
Gather runtime telemetry from a running Ember application.

    ember-telemetry http://localhost:4200 --output telemetry.json
"""

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any, List, Optional

from .cache import DEFAULT_CACHE_DIR, DiskCache
from .gather import DEFAULT_TIMEOUT_MS, TelemetryGatherer


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


async def main_async(args: argparse.Namespace) -> None:
    gatherer = TelemetryGatherer(
        url=args.url,
        cache=DiskCache(args.cache_dir),
        headless=not args.headed,
        timeout_ms=args.timeout,
    )
    telemetry = await gatherer.gather()
    if args.output:
        output_path = Path(args.output)
        write_json(output_path, telemetry)
        print(f"Snapshot: {output_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gather runtime telemetry from an Ember application")
    parser.add_argument("url", help="URL of the running Ember app")
    parser.add_argument("--cache-dir", default=DEFAULT_CACHE_DIR, help="Directory of the telemetry cache")
    parser.add_argument("--output", "-o", help="Also write the snapshot to this JSON file")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT_MS,
        help="Navigation timeout in milliseconds",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    asyncio.run(main_async(args))


if __name__ == "__main__":
    main()
