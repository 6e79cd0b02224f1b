"""Run one file through the formatter and act on the result."""

import os
import stat
import sys
import tempfile
from dataclasses import dataclass, field
from typing import BinaryIO

from pyimports.diff import render_diff
from pyimports.errors import OutputWriteError, ReadError, WriteError
from pyimports.formatter import FormatOptions, format_source

STDIN_NAME = "<standard input>"


@dataclass(frozen=True)
class Settings:
    """What to do with each formatted file.

    With none of *write*, *list_files* or *diff* set the formatted source is
    printed unconditionally.
    """

    write: bool = False
    list_files: bool = False
    diff: bool = False
    verbose: bool = False
    src_dir: str = ""
    exclude: tuple[str, ...] = ()
    options: FormatOptions = field(default_factory=FormatOptions)

    @property
    def passthrough(self) -> bool:
        return not (self.write or self.list_files or self.diff)


def target_for(filename: str, src_dir: str) -> str:
    """Path the formatter should treat *filename* as living at."""
    if src_dir:
        return os.path.join(src_dir, os.path.basename(filename))
    return filename


def write_file(filename: str, data: bytes) -> None:
    """Atomically replace the contents of *filename* with *data*.

    Symlinks are followed, so the link stays and its target is rewritten.
    The permission bits of the file are kept.
    """
    path = os.path.realpath(filename)
    original_mode = stat.S_IMODE(os.stat(path).st_mode)
    directory = os.path.dirname(path)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    try:
        with open(tmp_fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_path, original_mode)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def _emit(out: BinaryIO, filename: str, data: bytes) -> None:
    try:
        out.write(data)
    except OSError as exc:
        raise OutputWriteError(filename, f"cannot write output: {exc}") from exc


def process_file(
    filename: str,
    settings: Settings,
    out: BinaryIO,
    in_stream: BinaryIO | None = None,
) -> bool:
    """Format *filename* and apply the dispositions selected in *settings*.

    Source is read from *in_stream* when given, otherwise from the file.
    Returns whether formatting changed the content. Failures are raised as
    :class:`~pyimports.errors.PyimportsError` subclasses and never leave a
    partially written file behind.
    """
    if settings.verbose:
        print(f"processing {filename}", file=sys.stderr)

    try:
        if in_stream is not None:
            src = in_stream.read()
        else:
            with open(filename, "rb") as f:
                src = f.read()
    except OSError as exc:
        raise ReadError(filename, exc.strerror or str(exc)) from exc

    res = format_source(target_for(filename, settings.src_dir), src, settings.options)

    changed = res != src
    if changed:
        if settings.list_files:
            _emit(out, filename, os.fsencode(filename) + b"\n")
        if settings.write:
            try:
                write_file(filename, res)
            except OSError as exc:
                raise WriteError(filename, exc.strerror or str(exc)) from exc
        if settings.diff:
            _emit(out, filename, render_diff(src, res, filename))

    if settings.passthrough:
        _emit(out, filename, res)

    return changed
