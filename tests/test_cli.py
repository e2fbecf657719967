"""Tests for the command line entry point."""

from pathlib import Path

import pytest

from cl_image_proxy import __main__ as cli
from cl_image_proxy.common.config import ResizeFilter


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])

    assert args.port == 3000
    assert args.host == "0.0.0.0"
    assert args.remote_cdn is None
    assert args.local_folder is None
    assert args.resize_filter == "lanczos"


def test_parser_short_flags(tmp_path: Path) -> None:
    args = cli.build_parser().parse_args(
        ["-p", "8080", "-r", "https://cdn.example.com/", "-l", str(tmp_path)]
    )

    assert args.port == 8080
    assert args.remote_cdn == "https://cdn.example.com/"
    assert args.local_folder == tmp_path


def test_main_requires_an_origin(log_messages: list[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda _level: None)

    assert cli.main([]) == 1
    assert [m for m in log_messages if "Either 'remote_cdn' or 'local_folder' is required" in m]


def test_main_starts_server(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []

    def fake_run(app: object, **kwargs: object) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(cli, "configure_logging", lambda _level: None)
    monkeypatch.setattr(cli.uvicorn, "run", fake_run)

    assert cli.main(["-l", str(tmp_path), "-p", "9000", "--filter", "bicubic"]) == 0
    assert calls[0]["port"] == 9000
    assert calls[0]["app"].state.config.resize_filter is ResizeFilter.BICUBIC  # type: ignore[attr-defined]
