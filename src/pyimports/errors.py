"""Errors raised while resolving, formatting, and writing files."""


class PyimportsError(Exception):
    """Base class for failures local to a single path."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class PathLookupError(PyimportsError):
    """A path argument (or a directory below it) could not be looked up."""


class ReadError(PyimportsError):
    """The source bytes could not be read."""


class WriteError(PyimportsError):
    """The formatted result could not be written back to the file."""


class MalformedDiffError(PyimportsError):
    """Diff output was too short to carry a header."""


class OutputWriteError(PyimportsError):
    """Writing to the output sink failed."""


class FormatError(PyimportsError):
    """The formatter rejected the source.

    *diagnostics* holds one entry per reported line. Unless *all_errors* is
    set only the first ``MAX_DIAGNOSTICS`` distinct lines are kept.
    """

    MAX_DIAGNOSTICS = 10

    def __init__(
        self, path: str, diagnostics: list[str], all_errors: bool = False
    ) -> None:
        if not all_errors:
            diagnostics = _first_distinct(diagnostics, self.MAX_DIAGNOSTICS)
        self.diagnostics = diagnostics
        message = f"\n{path}: ".join(diagnostics) if diagnostics else "cannot format"
        super().__init__(path, message)


def _first_distinct(lines: list[str], limit: int) -> list[str]:
    seen: set[str] = set()
    kept: list[str] = []
    for line in lines:
        if line in seen:
            continue
        seen.add(line)
        kept.append(line)
        if len(kept) == limit:
            break
    return kept
