from __future__ import annotations

import hashlib
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from huffpack.cli import main
from huffpack.errors import (
    EXIT_CORRUPT_STREAM,
    EXIT_EMPTY_INPUT,
    EXIT_IO,
    EXIT_SENTINEL_COLLISION,
    EXIT_USAGE,
)

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def _run_cli(*args: str, cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """Run huffpack CLI through a python -c wrapper.

    This avoids assuming the console-script entrypoint is installed.
    """
    cmd = [
        sys.executable,
        "-c",
        "from huffpack.cli import main; raise SystemExit(main())",
        *args,
    ]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(SRC_DIR), env.get("PYTHONPATH")) if p)
    return subprocess.run(
        cmd,
        cwd=str(cwd) if cwd else None,
        text=True,
        capture_output=True,
        env=env,
    )


def test_cli_roundtrip_text_format(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.bin"
    back = tmp_path / "back.txt"
    data = "HELLO 123\nRIGA ARTICOLO: vite M3 qty=10 prezzo=1.20\n"
    inp.write_text(data, encoding="utf-8")

    r = _run_cli("compress", str(inp), str(out))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "=== huffpack stats ===" in r.stdout

    r = _run_cli("verify", str(out), "--original", str(inp))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "OK" in r.stdout

    r = _run_cli("decompress", str(out), str(back))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert back.read_text(encoding="utf-8") == data


def test_cli_default_file_names(tmp_path: Path) -> None:
    (tmp_path / "input.txt").write_bytes(b"ab ba")

    r = _run_cli("compress", "--quiet", cwd=tmp_path)
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert (tmp_path / "output.bin").read_bytes() == b"3\n_ 1\na 2\nb 2\n8\n\xd3"

    r = _run_cli("decompress", cwd=tmp_path)
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert (tmp_path / "decoded.txt").read_bytes() == b"ab ba"


def test_cli_binary_via_options_spec(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.hfp"
    back = tmp_path / "back.txt"
    inp.write_bytes(b"snake_case_names and spaces")
    spec = json.dumps({"spec": "huffpack.options.v1", "format": "binary"})

    r = _run_cli("options-validate", spec)
    assert r.returncode == 0, (r.stdout, r.stderr)

    r = _run_cli("compress", str(inp), str(out), "--options", spec, "--quiet")
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert out.read_bytes()[:3] == b"HFP"

    r = _run_cli("decompress", str(out), str(back))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert back.read_bytes() == inp.read_bytes()


def test_cli_missing_input_exit_io(tmp_path: Path) -> None:
    r = _run_cli("compress", str(tmp_path / "missing.txt"), str(tmp_path / "out.bin"))
    assert r.returncode == EXIT_IO
    assert "[huffpack]" in r.stderr


def test_cli_empty_input_exit_code(tmp_path: Path) -> None:
    inp = tmp_path / "empty.txt"
    inp.write_bytes(b"")
    r = _run_cli("compress", str(inp), str(tmp_path / "out.bin"))
    assert r.returncode == EXIT_EMPTY_INPUT
    assert "[huffpack]" in r.stderr


def test_cli_sentinel_collision(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.bin"
    back = tmp_path / "back.txt"
    inp.write_bytes(b"a_b c")

    r = _run_cli("compress", str(inp), str(out))
    assert r.returncode == EXIT_SENTINEL_COLLISION

    r = _run_cli("compress", str(inp), str(out), "--allow-sentinel-collision", "--quiet")
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert "warning" in r.stderr
    r = _run_cli("decompress", str(out), str(back))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert back.read_bytes() == b"a b c"


def test_cli_truncated_artifact_exit_corrupt(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.bin"
    inp.write_bytes(b"compress me, then cut one byte off")
    assert _run_cli("compress", str(inp), str(out), "--quiet").returncode == 0
    out.write_bytes(out.read_bytes()[:-1])

    r = _run_cli("decompress", str(out), str(tmp_path / "back.txt"))
    assert r.returncode == EXIT_CORRUPT_STREAM
    assert "[huffpack]" in r.stderr


def test_cli_bad_options_exit_usage(tmp_path: Path) -> None:
    r = _run_cli("options-validate", "{}")
    assert r.returncode == EXIT_USAGE
    assert "[huffpack]" in r.stderr


def test_cli_text_with_bytes_layer_exit_usage(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    inp.write_bytes(b"abc")
    r = _run_cli("compress", str(inp), str(tmp_path / "o"), "--format", "text", "--layer", "bytes")
    assert r.returncode == EXIT_USAGE


def test_show_prints_tables_and_tree(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    art = tmp_path / "out.bin"
    art.write_bytes(b"3\n_ 1\na 2\nb 2\n8\n\xd3")

    assert main(["show", str(art)]) == 0
    out = capsys.readouterr().out
    assert "--- codes ---\n_ 10\na 11\nb 0\n" in out
    assert "*:5" in out


def test_show_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    art = tmp_path / "out.bin"
    art.write_bytes(b"3\n_ 1\na 2\nb 2\n8\n\xd3")

    assert main(["show", str(art), "--json"]) == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj["format"] == "text"
    assert obj["freq"] == {"_": 1, "a": 2, "b": 2}
    assert obj["codes"] == {"_": "10", "a": "11", "b": "0"}


def test_debug_reraises(tmp_path: Path) -> None:
    from huffpack.errors import InputNotFound

    with pytest.raises(InputNotFound):
        main(["verify", str(tmp_path / "nope.bin"), "--debug"])


def test_cli_output_in_missing_dir_exit_io(tmp_path: Path) -> None:
    inp = tmp_path / "in.txt"
    inp.write_bytes(b"ab ba")
    r = _run_cli("compress", str(inp), str(tmp_path / "nodir" / "out.bin"))
    assert r.returncode == EXIT_IO
    assert "[huffpack]" in r.stderr


def test_cli_input_is_a_directory_exit_io(tmp_path: Path) -> None:
    r = _run_cli("compress", str(tmp_path), str(tmp_path / "out.bin"))
    assert r.returncode == EXIT_IO
    assert "[huffpack]" in r.stderr


def test_cli_input_under_regular_file_exit_io(tmp_path: Path) -> None:
    plain = tmp_path / "plain.txt"
    plain.write_bytes(b"not a directory")
    r = _run_cli("compress", str(plain / "child.txt"), str(tmp_path / "out.bin"))
    assert r.returncode == EXIT_IO
    assert "[huffpack]" in r.stderr
    assert "error:" not in r.stderr


def test_read_input_maps_every_oserror(tmp_path: Path) -> None:
    from huffpack.compressor import read_input
    from huffpack.errors import InputNotFound

    plain = tmp_path / "plain.txt"
    plain.write_bytes(b"x")
    for bad in (tmp_path, plain / "child.txt", tmp_path / "missing.txt"):
        with pytest.raises(InputNotFound):
            read_input(bad)


def test_verify_json_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    inp = tmp_path / "in.txt"
    out = tmp_path / "out.bin"
    inp.write_bytes(b"ab ba")
    assert main(["compress", str(inp), str(out), "--quiet"]) == 0
    capsys.readouterr()

    assert main(["verify", str(out), "--original", str(inp), "--json"]) == 0
    obj = json.loads(capsys.readouterr().out)
    assert obj["ok"] is True
    assert obj["format"] == "text"
    assert obj["symbols"] == 3
    assert obj["total"] == 5
    assert obj["lastbits"] == 8
    assert obj["payload_bytes"] == 1
    assert obj["decoded_sha256"] == hashlib.sha256(b"ab ba").hexdigest()
