"""Write openapi.json from the FastAPI application's generated OpenAPI.

Usage:
  python scripts/sync_openapi.py
"""

from __future__ import annotations

import json
from pathlib import Path


def main() -> int:
    from coolapp.main import app

    spec = app.openapi()

    out_path = Path("openapi.json")
    out_path.write_text(
        json.dumps(spec, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )

    paths = spec.get("paths", {}) or {}
    print(f"Wrote {out_path} ({len(paths)} paths)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
