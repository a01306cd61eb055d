"""Helpers for post-processing generated source code."""

from __future__ import annotations

import hashlib
import subprocess
import tempfile
from collections.abc import Iterable, Sequence
from pathlib import Path

START_BOILERPLATE = "/* <----- */"
END_BOILERPLATE = "/* -----> */"


class FormatError(OSError):
    """A formatter command ran but did not succeed."""

    def __init__(self, returncode: int | None, stderr: str) -> None:
        super().__init__(
            f"command failed with exit code {returncode}\nstderr:\n{stderr}"
        )
        self.returncode = returncode
        self.stderr = stderr


def format_with(commands: Iterable[Sequence[str]], src: str) -> str:
    """Format ``src`` with the first command that can be started.

    The source is piped to the command's stdin and its stdout is returned.
    Commands whose executable does not exist are skipped.
    """
    for command in commands:
        try:
            completed = subprocess.run(
                list(command),
                input=src.encode("utf-8"),
                capture_output=True,
                check=False,
            )
        except FileNotFoundError:
            continue
        if completed.returncode != 0:
            raise FormatError(
                completed.returncode,
                completed.stderr.decode("utf-8", errors="replace"),
            )
        return completed.stdout.decode("utf-8")
    raise FileNotFoundError("no formatters found")


def tmp_path(src: str) -> Path:
    """Return a temporary directory path derived from a hash of ``src``."""
    digest = hashlib.blake2b(src.encode("utf-8"), digest_size=8).digest()
    value = int.from_bytes(digest, "little")
    return Path(tempfile.gettempdir()) / f"reflectapi-{value}"


def _lines(src: str) -> list[str]:
    lines = src.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def strip_boilerplate(src: str) -> str:
    """Remove every region enclosed by boilerplate marker lines."""
    kept: list[str] = []
    skip = False
    for line in _lines(src):
        if START_BOILERPLATE in line:
            if skip:
                raise ValueError("nested start boilerplate markers")
            skip = True
            continue
        if END_BOILERPLATE in line:
            if not skip:
                raise ValueError("unmatched end boilerplate marker")
            skip = False
            continue
        if not skip:
            kept.append(line + "\n")
    if skip:
        raise ValueError("unmatched boilerplate marker")
    return "".join(kept)