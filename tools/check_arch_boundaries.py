#!/usr/bin/env python3
"""Run the LOW -> ORCH import check outside pytest (pre-commit, CI lint step).

Loads tests/test_arch_boundaries.py as a module and calls every
``test_*`` function in it. Exit codes: 0 ok, 2 violation, 3 setup error.
"""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

TEST_FILE = Path(__file__).resolve().parents[1] / "tests" / "test_arch_boundaries.py"


def main() -> int:
    if not TEST_FILE.is_file():
        print(f"[huffpack] missing {TEST_FILE}", file=sys.stderr)
        return 3

    spec = importlib.util.spec_from_file_location("huffpack_arch_check", TEST_FILE)
    if spec is None or spec.loader is None:
        print(f"[huffpack] cannot load {TEST_FILE}", file=sys.stderr)
        return 3
    mod = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = mod
    spec.loader.exec_module(mod)

    checks = [getattr(mod, n) for n in sorted(dir(mod)) if n.startswith("test_")]
    failed = 0
    for fn in checks:
        try:
            fn()
        except AssertionError as e:
            failed += 1
            print(f"FAIL {fn.__name__}\n{e}", file=sys.stderr)
        else:
            print(f"ok   {fn.__name__}")

    return 2 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
