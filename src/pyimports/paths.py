"""Expand path arguments into the Python files they name.

An argument is a file, a directory, or a recursive pattern: ``...`` for the
current directory or ``<dir>/...`` for *dir*. Directories are always walked
recursively; below the starting directory, ``vendor`` and hidden
subdirectories are never entered.
"""

import fnmatch
import os
import stat
from collections.abc import Callable, Iterator

from pyimports.errors import PathLookupError

RECURSIVE_MARKER = "..."
SOURCE_SUFFIX = ".py"
VENDOR_DIR = "vendor"


def split_pattern(arg: str) -> tuple[str, bool]:
    """Return ``(directory_or_path, is_recursive_pattern)`` for *arg*."""
    if arg == RECURSIVE_MARKER:
        return ".", True
    if arg.endswith("/" + RECURSIVE_MARKER):
        root = arg[: -len(RECURSIVE_MARKER) - 1]
        return root or ".", True
    return arg, False


def is_source_file(name: str) -> bool:
    return not name.startswith(".") and name.endswith(SOURCE_SUFFIX)


def is_excluded_dir(name: str, exclude: tuple[str, ...] = ()) -> bool:
    """Whether a directory called *name* is skipped along with everything below it."""
    if name == VENDOR_DIR or name.startswith("."):
        return True
    return any(fnmatch.fnmatch(name, pattern) for pattern in exclude)


def walk_source_files(
    root: str,
    exclude: tuple[str, ...] = (),
    on_error: Callable[[PathLookupError], None] | None = None,
) -> Iterator[str]:
    """Yield Python files below *root*, depth first, in lexical order.

    *root* itself is always entered, even if its own name would be excluded.
    A subdirectory that cannot be listed is passed to *on_error* and the walk
    carries on with its siblings; without *on_error* the error is raised.
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        error = PathLookupError(root, exc.strerror or str(exc))
        if on_error is None:
            raise error from exc
        on_error(error)
        return

    for entry in entries:
        child = os.path.normpath(os.path.join(root, entry.name))
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            is_dir = False
        if is_dir:
            if not is_excluded_dir(entry.name, exclude):
                yield from walk_source_files(child, exclude, on_error)
        elif is_source_file(entry.name):
            yield child


def iter_source_files(
    arg: str,
    exclude: tuple[str, ...] = (),
    on_error: Callable[[PathLookupError], None] | None = None,
) -> Iterator[str]:
    """Resolve one command-line path argument into candidate files.

    A regular file is yielded as given, without filtering; ``<file>/...``
    yields the file only if it is a Python source file. A directory, plain
    or as a pattern root, is handed to :func:`walk_source_files`. Raises
    :class:`PathLookupError` when the argument does not exist or cannot be
    examined.
    """
    path, recursive = split_pattern(arg)
    try:
        st = os.stat(path)
    except OSError as exc:
        raise PathLookupError(path, exc.strerror or str(exc)) from exc

    if stat.S_ISDIR(st.st_mode):
        yield from walk_source_files(path, exclude, on_error)
    elif not recursive or is_source_file(os.path.basename(path)):
        yield path
