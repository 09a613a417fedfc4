#!/usr/bin/env python3
"""Randomized round-trip smoke test for huffpack.

Goal:
- deterministic (seeded) texts of varied shape: skewed, uniform, one symbol,
  newline/digit heavy, lengths hitting the byte-alignment boundary
- both artifact formats, through the library API (no subprocess)
- JSON report, non-zero exit on any mismatch

Usage examples:
  python tools/smoke_roundtrip.py --iters 200
  python tools/smoke_roundtrip.py --iters 50 --seed 123 --report out.json
"""

from __future__ import annotations

import argparse
import json
import random
import string
import sys
from pathlib import Path
from typing import Any


def _gen_text(rng: random.Random) -> bytes:
    kind = rng.choice(["skewed", "uniform", "single", "lines", "digits"])
    n = rng.randint(1, 4000)
    if kind == "single":
        return bytes([rng.choice(b"abcxyz\n")]) * n
    if kind == "uniform":
        alphabet = string.ascii_letters + string.digits + " .,;:\n"
        return "".join(rng.choice(alphabet) for _ in range(n)).encode("ascii")
    if kind == "digits":
        return "\n".join(str(rng.randint(0, 10**6)) for _ in range(n // 7 + 1)).encode("ascii")
    if kind == "lines":
        words = ["invoice", "total", "qty", "price", "item", "the", "of", "and"]
        lines = [
            " ".join(rng.choice(words) for _ in range(rng.randint(1, 12)))
            for _ in range(n // 40 + 1)
        ]
        return ("\n".join(lines) + "\n").encode("ascii")
    # skewed: a few symbols dominate
    weights = [50, 20, 10, 5, 5, 3, 3, 2, 1, 1]
    return bytes(rng.choices(b"e tanoisr\n", weights=weights, k=n))


def main(argv: list[str] | None = None) -> int:
    sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))
    from huffpack.compressor import compress_bytes, decompress_bytes  # noqa: E402
    from huffpack.options_spec import resolve_options  # noqa: E402

    ap = argparse.ArgumentParser(description="huffpack round-trip smoke")
    ap.add_argument("--iters", type=int, default=100)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--report", type=Path, default=None)
    ns = ap.parse_args(argv)

    rng = random.Random(ns.seed)
    failures: list[dict[str, Any]] = []
    total_in = 0
    total_out: dict[str, int] = {"text": 0, "binary": 0}

    for i in range(ns.iters):
        data = _gen_text(rng)
        total_in += len(data)
        for fmt in ("text", "binary"):
            blob, _enc = compress_bytes(data, resolve_options(fmt=fmt))
            total_out[fmt] += len(blob)
            back = decompress_bytes(blob)
            if back != data:
                failures.append({"iter": i, "format": fmt, "len": len(data)})

    report = {
        "iters": ns.iters,
        "seed": ns.seed,
        "bytes_in": total_in,
        "bytes_out": total_out,
        "failures": failures,
    }
    out = json.dumps(report, indent=2)
    if ns.report:
        ns.report.write_text(out + "\n", encoding="utf-8")
    print(out)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
