#!/usr/bin/env python3
"""Dump the dashboard state stored behind a sync endpoint.

Usage
-----
::

    python scripts/dump_state.py https://your-dashboard.vercel.app

Options::

    --regions       Print the typed region view instead of the raw object
    --output FILE   Write output to FILE instead of stdout
    --verbose, -v   Enable debug logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from ieltsplan import IeltsPlanError, SyncClient  # noqa: E402
from ieltsplan.models import SyncSnapshot  # noqa: E402


def _summary(snapshot: SyncSnapshot) -> str:
    lines = [f"Planner days: {len(snapshot.planner)}"]
    for date_key in sorted(snapshot.planner):
        plan = snapshot.planner[date_key]
        lines.append(f"  {date_key}: {len(plan.tasks)} task(s), avg progress {plan.average_progress:.0f}%")
    hub = snapshot.resource_hub
    for category in ("vocabulary", "listening", "reading", "writing", "speaking"):
        lines.append(f"{category.title()}: {len(getattr(hub, category))} item(s)")
    lines.append(f"Watch-list: {len(snapshot.chill_zone.series_list)} series")
    return "\n".join(lines)


async def _dump(base_url: str, regions: bool) -> str:
    async with SyncClient(base_url) as client:
        if regions:
            snapshot = await client.load_snapshot()
            return _summary(snapshot) + "\n\n" + json.dumps(snapshot.to_wire(), indent=2, ensure_ascii=False)
        state: dict[str, Any] = await client.load()
        return json.dumps(state, indent=2, ensure_ascii=False, sort_keys=True)


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump IELTS Master Plan dashboard state.")
    parser.add_argument("base_url", help="Dashboard base URL (the sync endpoint is <base_url>/api/sync)")
    parser.add_argument("--regions", action="store_true", help="Print the typed region view")
    parser.add_argument("--output", "-o", help="Write output to FILE instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        output = asyncio.run(_dump(args.base_url, args.regions))
    except IeltsPlanError as exc:
        print(f"Failed to load state: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
    else:
        print(output)


if __name__ == "__main__":
    main()
