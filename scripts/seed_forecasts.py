#!/usr/bin/env python3
"""Generate forecasts on a running server and print the table.

Usage:
  python scripts/seed_forecasts.py [count] [--second]
"""

from __future__ import annotations

import asyncio
import sys

from coolapp.client import ForecastApiClient, ForecastBoard


async def main(count: int, path: str) -> int:
    board = ForecastBoard(ForecastApiClient(path=path))
    await board.generate(count)

    if board.error_message:
        print(f"❌ {board.error_message}")
        return 1

    print(f"{'Date':<12}{'Temp. (C)':>10}{'Temp. (F)':>10}  Summary")
    for f in board.forecasts:
        print(f"{f.date.isoformat():<12}{f.temperature_c:>10}{f.temperature_f:>10}  {f.summary}")
    print(f"\n✅ {len(board.forecasts)} forecasts on {path}")
    return 0


if __name__ == "__main__":
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    path = "/second" if "--second" in sys.argv else "/weatherforecast"
    raise SystemExit(asyncio.run(main(int(args[0]) if args else 5, path)))
