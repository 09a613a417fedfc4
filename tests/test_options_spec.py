from __future__ import annotations

import json
from pathlib import Path

import pytest

from huffpack.options_spec import (
    CompressOptions,
    OptionsSpecError,
    load_options_spec,
    resolve_options,
)


def test_defaults() -> None:
    assert resolve_options() == CompressOptions(format="text", layer="sentinel", on_collision="reject")


def test_binary_defaults_to_bytes_layer() -> None:
    assert resolve_options(fmt="binary").layer == "bytes"


def test_inline_minimal() -> None:
    spec = load_options_spec(json.dumps({"spec": "huffpack.options.v1"}))
    assert spec.format is None
    assert spec.layer is None
    assert spec.on_collision is None


def test_from_file(tmp_path: Path) -> None:
    p = tmp_path / "o.json"
    p.write_text(
        json.dumps({"spec": "huffpack.options.v1", "format": "binary", "on_collision": "allow"}),
        encoding="utf-8",
    )
    spec = load_options_spec(f"@{p}")
    opts = resolve_options(spec)
    assert opts == CompressOptions(format="binary", layer="bytes", on_collision="allow")


def test_cli_arguments_override_spec() -> None:
    spec = load_options_spec(json.dumps({"spec": "huffpack.options.v1", "format": "binary"}))
    assert resolve_options(spec, fmt="text").format == "text"
    assert resolve_options(spec, layer="sentinel").layer == "sentinel"


@pytest.mark.parametrize(
    "obj",
    [
        {},
        {"spec": "huffpack.options.v0"},
        {"spec": "huffpack.options.v1", "wat": 1},
        {"spec": "huffpack.options.v1", "format": "zip"},
        {"spec": "huffpack.options.v1", "format": 3},
        {"spec": "huffpack.options.v1", "on_collision": "escape"},
        {"spec": "huffpack.options.v1", "format": "text", "layer": "bytes"},
    ],
)
def test_rejected(obj: dict) -> None:
    with pytest.raises(OptionsSpecError):
        load_options_spec(json.dumps(obj))


@pytest.mark.parametrize("arg", ["", "   ", "[1, 2]", "{not json", "@/nonexistent/options.json"])
def test_bad_arguments(arg: str) -> None:
    with pytest.raises(OptionsSpecError):
        load_options_spec(arg)


def test_text_with_bytes_layer_rejected_at_resolve() -> None:
    with pytest.raises(OptionsSpecError):
        resolve_options(fmt="text", layer="bytes")
