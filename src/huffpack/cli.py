"""huffpack CLI.

This is the stable CLI entrypoint (console-script: ``huffpack``).

UX policy:
  - compress/decompress default to the original tool's file names
    (input.txt -> output.bin -> decoded.txt) when paths are omitted.
  - Errors print ``[huffpack] <message>`` on stderr and map to the exit codes
    in huffpack.errors; ``--debug`` re-raises them.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from huffpack.errors import EXIT_GENERIC, EXIT_USAGE, HuffpackError, UsageError
from huffpack.options_spec import OptionsSpecError, load_options_spec, resolve_options


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _compress(
    input_path: Path,
    output_path: Path,
    *,
    options_arg: str | None,
    fmt: str | None,
    layer: str | None,
    allow_collision: bool,
    quiet: bool,
) -> int:
    from huffpack.compressor import compress_file, print_stats

    spec = load_options_spec(options_arg) if options_arg else None
    # precedence: CLI flags > spec > defaults
    opts = resolve_options(
        spec,
        fmt=fmt,
        layer=layer,
        on_collision="allow" if allow_collision else None,
    )
    enc = compress_file(input_path, output_path, opts)
    if not quiet:
        print_stats(input_path, output_path, enc)
    return 0


def _decompress(input_path: Path, output_path: Path, *, quiet: bool) -> int:
    from huffpack.compressor import decompress_file

    decompress_file(input_path, output_path)
    if not quiet:
        print(f"Decompression complete: {output_path}")
    return 0


def _verify(input_path: Path, original: Path | None, *, as_json: bool) -> int:
    from huffpack.verify import verify_artifact_file

    rep = verify_artifact_file(input_path, original)
    if as_json:
        print(json.dumps({"ok": True, **asdict(rep)}, indent=2))
        return 0
    print("OK")
    return 0


def _show(input_path: Path, *, as_json: bool) -> int:
    from huffpack.compressor import read_input
    from huffpack.core.codes import build_code_table, render_code_table
    from huffpack.core.huffman_tree import build_huffman_tree, render_tree, symbol_label
    from huffpack.engine.container import read_artifact

    art = read_artifact(read_input(input_path))
    root = build_huffman_tree(art.freq)
    codes = build_code_table(root)

    if as_json:
        obj = {
            "format": art.format,
            "layer": art.layer,
            "lastbits": art.lastbits,
            "payload_bytes": len(art.payload),
            "freq": {symbol_label(s): f for s, f in art.freq.items()},
            "codes": {symbol_label(s): c for s, c in sorted(codes.items())},
        }
        print(json.dumps(obj, ensure_ascii=False, indent=2))
        return 0

    print(f"=== {input_path} ({art.format}, layer={art.layer}) ===")
    print(f"{len(art.freq)} symbols, lastbits={art.lastbits}, payload={len(art.payload)} bytes")
    print("--- frequencies ---")
    for s, f in art.freq.items():
        print(f"{symbol_label(s)} {f}")
    print("--- codes ---")
    for line in render_code_table(codes):
        print(line)
    print("--- tree ---")
    for line in render_tree(root):
        print(line)
    return 0


def _options_validate(options_arg: str) -> int:
    # load is the validation
    load_options_spec(options_arg)
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffpack", description="Huffman text compressor")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a text file")
    p_c.add_argument("input", type=Path, nargs="?", default=Path("input.txt"))
    p_c.add_argument("output", type=Path, nargs="?", default=Path("output.bin"))
    p_c.add_argument(
        "--options",
        default=None,
        help="Options spec (JSON). Use '@file.json' to load from file, or pass JSON inline.",
    )
    p_c.add_argument(
        "--format",
        choices=["text", "binary"],
        default=None,
        help="Artifact format (default: spec.format or text)",
    )
    p_c.add_argument(
        "--layer",
        choices=["sentinel", "bytes"],
        default=None,
        help="Symbol layer (default: sentinel for text, bytes for binary)",
    )
    p_c.add_argument(
        "--allow-sentinel-collision",
        action="store_true",
        help="Accept input containing '_' (it will decode as a space)",
    )
    p_c.add_argument("--quiet", action="store_true", help="Do not print stats")
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress an artifact (text or binary)")
    p_d.add_argument("input", type=Path, nargs="?", default=Path("output.bin"))
    p_d.add_argument("output", type=Path, nargs="?", default=Path("decoded.txt"))
    p_d.add_argument("--quiet", action="store_true")
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Fully decode an artifact without writing output")
    p_v.add_argument("input", type=Path)
    p_v.add_argument(
        "--original", type=Path, default=None, help="Also compare against the original file"
    )
    p_v.add_argument("--json", action="store_true", help="Print the verify report as JSON")
    _add_common_args(p_v)

    p_s = sub.add_parser("show", help="Print frequency table, code table and tree")
    p_s.add_argument("input", type=Path)
    p_s.add_argument("--json", action="store_true", help="Print a JSON object instead")
    _add_common_args(p_s)

    p_o = sub.add_parser("options-validate", help="Validate an options spec (v1)")
    p_o.add_argument("options", help="Options spec JSON (@file.json or inline JSON)")
    _add_common_args(p_o)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _compress(
                ns.input,
                ns.output,
                options_arg=ns.options,
                fmt=ns.format,
                layer=ns.layer,
                allow_collision=bool(ns.allow_sentinel_collision),
                quiet=bool(ns.quiet),
            )
        if ns.cmd == "decompress":
            return _decompress(ns.input, ns.output, quiet=bool(ns.quiet))
        if ns.cmd == "verify":
            return _verify(ns.input, ns.original, as_json=bool(ns.json))
        if ns.cmd == "show":
            return _show(ns.input, as_json=bool(ns.json))
        if ns.cmd == "options-validate":
            return _options_validate(str(ns.options))
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except (OptionsSpecError, UsageError) as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] {e}", file=sys.stderr)
        return EXIT_USAGE
    except HuffpackError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
