#!/usr/bin/env python3
"""Render docs/exit_codes.md from src/huffpack/errors.py.

  python scripts/gen_exit_codes_md.py           # (re)write the doc
  python scripts/gen_exit_codes_md.py --check   # exit 1 if the doc is stale (CI)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
DOC = REPO / "docs" / "exit_codes.md"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Generate the exit-code table")
    ap.add_argument("--check", action="store_true", help="Compare only, do not write")
    ns = ap.parse_args(argv)

    sys.path.insert(0, str(REPO / "src"))
    from huffpack.errors import render_exit_codes_markdown  # noqa: E402

    text = render_exit_codes_markdown()
    if ns.check:
        current = DOC.read_text(encoding="utf-8") if DOC.is_file() else ""
        if current != text:
            print(f"[huffpack] {DOC} is stale; rerun without --check", file=sys.stderr)
            return 1
        print(f"[huffpack] {DOC} up to date")
        return 0

    DOC.parent.mkdir(parents=True, exist_ok=True)
    DOC.write_text(text, encoding="utf-8")
    print(f"[huffpack] wrote {DOC}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
