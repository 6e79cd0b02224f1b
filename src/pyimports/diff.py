"""Unified diffs between original and formatted bytes."""

import difflib
import os
from collections.abc import Iterable, Iterator

from pyimports.errors import MalformedDiffError

NO_NEWLINE = b"\\ No newline at end of file\n"


def _terminate(lines: Iterable[bytes]) -> Iterator[bytes]:
    # difflib leaves a final line without its newline; mark it the way diff -u does.
    for line in lines:
        if line.endswith(b"\n"):
            yield line
        else:
            yield line + b"\n" + NO_NEWLINE


def replace_header(diff: bytes, filename: str) -> bytes:
    """Point the ``---``/``+++`` lines of *diff* at ``a/<filename>`` and ``b/<filename>``."""
    parts = diff.split(b"\n", 2)
    if len(parts) < 3:
        raise MalformedDiffError(filename, "unexpected diff output")
    name = os.fsencode(filename)
    parts[0] = b"--- a/" + name
    parts[1] = b"+++ b/" + name
    return b"\n".join(parts)


def render_diff(original: bytes, formatted: bytes, filename: str) -> bytes:
    """Return a unified diff of *original* against *formatted* for *filename*.

    Identical inputs give ``b""``.
    """
    lines = difflib.diff_bytes(
        difflib.unified_diff,
        original.splitlines(keepends=True),
        formatted.splitlines(keepends=True),
        fromfile=b"orig",
        tofile=b"formatted",
    )
    data = b"".join(_terminate(lines))
    if not data:
        return b""
    return replace_header(data, filename)
