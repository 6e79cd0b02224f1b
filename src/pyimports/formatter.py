"""Fix imports with isort, then format with black.

Both engines are used as libraries and treated as opaque: this module only
translates :class:`FormatOptions` into their settings and their failures
into :class:`~pyimports.errors.FormatError`.
"""

import io
import tokenize
from dataclasses import dataclass
from pathlib import Path

import black
import isort
from isort.exceptions import FileSkipped, ISortError

from pyimports.errors import FormatError

DEFAULT_LINE_LENGTH = 88

# isort's black profile keeps the two engines from undoing each other's work.
ISORT_PROFILE = "black"


@dataclass(frozen=True)
class FormatOptions:
    """Settings shared by every formatting call in one run."""

    line_length: int = DEFAULT_LINE_LENGTH
    format_only: bool = False
    all_errors: bool = False
    local_prefixes: tuple[str, ...] = ()

    @classmethod
    def parse_local(cls, value: str) -> tuple[str, ...]:
        """Split a comma-separated ``--local`` value into prefixes."""
        return tuple(p.strip() for p in value.split(",") if p.strip())


def _isort_config(target: str, options: FormatOptions) -> isort.Config:
    # Modules found next to the target identity count as first party, so an
    # overridden target directory changes how imports are grouped.
    src_dir = Path(target).parent.resolve()
    return isort.Config(
        profile=ISORT_PROFILE,
        line_length=options.line_length,
        known_first_party=frozenset(options.local_prefixes),
        src_paths=(src_dir,),
    )


def fix_imports(target: str, text: str, options: FormatOptions) -> str:
    """Sort and group the imports in *text* as though it lived at *target*."""
    try:
        return isort.code(
            text,
            config=_isort_config(target, options),
            file_path=Path(target),
            disregard_skip=True,
        )
    except FileSkipped:
        # The source opted out with an ``isort: skip_file`` comment.
        return text
    except ISortError as exc:
        raise FormatError(
            target, str(exc).splitlines(), all_errors=options.all_errors
        ) from exc
    except Exception as exc:
        raise FormatError(
            target,
            [f"isort: {type(exc).__name__}: {exc}"],
            all_errors=options.all_errors,
        ) from exc


def decode_source(src: bytes) -> tuple[str, str, str]:
    """Return ``(text, encoding, newline)`` for *src*.

    The encoding comes from a BOM or coding cookie (UTF-8 otherwise) and the
    newline style from the first line. *text* uses ``\\n`` line endings.
    """
    buf = io.BytesIO(src)
    encoding, lines = tokenize.detect_encoding(buf.readline)
    if not lines:
        return "", encoding, "\n"
    newline = "\r\n" if lines[0].endswith(b"\r\n") else "\n"
    buf.seek(0)
    with io.TextIOWrapper(buf, encoding) as wrapper:
        return wrapper.read(), encoding, newline


def format_source(target: str, src: bytes, options: FormatOptions) -> bytes:
    """Return the fixed and formatted version of *src*.

    *target* is the path the source is treated as coming from; it need not
    exist. The encoding and newline style of *src* are preserved. Raises
    :class:`FormatError` if the source cannot be decoded or if either engine
    fails on it.
    """
    try:
        text, encoding, newline = decode_source(src)
    except (LookupError, SyntaxError, UnicodeDecodeError) as exc:
        raise FormatError(target, [f"cannot decode source: {exc}"]) from exc

    if not options.format_only:
        text = fix_imports(target, text, options)

    mode = black.Mode(line_length=options.line_length, is_pyi=target.endswith(".pyi"))
    try:
        text = black.format_str(text, mode=mode)
    except black.InvalidInput as exc:
        raise FormatError(
            target, str(exc).splitlines(), all_errors=options.all_errors
        ) from exc
    except Exception as exc:
        # Any other black failure still only fails this file.
        raise FormatError(
            target,
            [f"black: {type(exc).__name__}: {exc}"],
            all_errors=options.all_errors,
        ) from exc

    if newline != "\n":
        text = text.replace("\n", newline)
    return text.encode(encoding)
