# tests/test_cli.py
"""Tests for the resourceio CLI, run as a subprocess against local files."""

from __future__ import annotations

import gzip
import os
import subprocess
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


def run_cli(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess[str]:
    """
    Run CLI command and return result.

    Args:
        *args: CLI arguments (e.g., "cat", "/tmp/file.txt")
        stdin: Text piped to the process

    Returns:
        CompletedProcess with stdout, stderr, returncode
    """
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        part for part in (str(SRC_DIR), env.get("PYTHONPATH", "")) if part
    )
    cmd = [sys.executable, "-m", "resourceio", *args]
    return subprocess.run(
        cmd,
        check=False,
        capture_output=True,
        text=True,
        input=stdin,
        env=env,
        timeout=30,  # Prevent hanging
        encoding="utf-8",  # Handle Unicode characters (checkmarks) in CLI output
    )


def test_cli_put_and_cat_gzip(tmp_path: Path) -> None:
    source = tmp_path / "source.txt"
    source.write_text("line one\nline two\n")
    target = tmp_path / "copy.txt.gz"

    put = run_cli("put", str(target), str(source), "--content-type", "text/plain")
    assert put.returncode == 0, put.stderr
    assert "✓ Wrote 18 bytes" in put.stdout
    assert gzip.decompress(target.read_bytes()) == b"line one\nline two\n"

    cat = run_cli("cat", str(target))
    assert cat.returncode == 0, cat.stderr
    assert cat.stdout == "line one\nline two\n"


def test_cli_put_from_stdin(tmp_path: Path) -> None:
    target = tmp_path / "stdin.txt"

    result = run_cli("put", str(target), "-", stdin="piped")

    assert result.returncode == 0, result.stderr
    assert target.read_text() == "piped"


def test_cli_cat_missing(tmp_path: Path) -> None:
    result = run_cli("cat", str(tmp_path / "absent.txt"))
    assert result.returncode == 1
    assert "Not found" in result.stderr


def test_cli_exists(tmp_path: Path) -> None:
    present = tmp_path / "here.txt"
    present.write_text("x")

    yes = run_cli("exists", str(present))
    no = run_cli("exists", str(tmp_path / "gone.txt"))

    assert (yes.returncode, yes.stdout.strip()) == (0, "true")
    assert (no.returncode, no.stdout.strip()) == (1, "false")


def test_cli_ls(tmp_path: Path) -> None:
    for name in ("b", "a"):
        (tmp_path / name).write_text("")

    result = run_cli("ls", str(tmp_path))

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == [str(tmp_path / "a"), str(tmp_path / "b")]


def test_cli_rm_local_is_unsupported(tmp_path: Path) -> None:
    target = tmp_path / "keep.txt"
    target.write_text("x")

    result = run_cli("rm", str(target))

    assert result.returncode == 2
    assert "does not support delete" in result.stderr
    assert target.exists()


def test_cli_invalid_identifier() -> None:
    result = run_cli("cat", "gs://")
    assert result.returncode == 2
    assert "Invalid identifier" in result.stderr


def test_cli_invalid_retry_policy(tmp_path: Path) -> None:
    result = run_cli("exists", str(tmp_path), "--max-retries", "-1")
    assert result.returncode == 2
    assert "invalid configuration" in result.stderr


def test_cli_read_as_raw_bytes(tmp_path: Path) -> None:
    target = tmp_path / "raw.gz"
    target.write_bytes(b"not really gzip")

    decoded = run_cli("cat", str(target))
    raw = run_cli("cat", str(target), "--compression", "none")

    assert decoded.returncode == 2
    assert "gzip codec error" in decoded.stderr
    assert (raw.returncode, raw.stdout) == (0, "not really gzip")
