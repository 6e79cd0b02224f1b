"""Read pyimports defaults from the ``[tool.pyimports]`` table of pyproject.toml.

Only a handful of keys are recognized; they mirror the long command-line
options and are overridden by them::

    [tool.pyimports]
    line-length = 100
    local = "myproject,tests"
    srcdir = "src/myproject"
    format-only = false
    extend-exclude = ["build*", "generated"]
"""

import tomllib
from pathlib import Path


class ConfigError(Exception):
    """Raised when the [tool.pyimports] section contains invalid settings."""


SECTION = "pyimports"

_SCALAR_KEYS: dict[str, type] = {
    "line-length": int,
    "local": str,
    "srcdir": str,
    "format-only": bool,
}

_LIST_STR_KEYS: set[str] = {"extend-exclude"}

VALID_KEYS: set[str] = {*_SCALAR_KEYS, *_LIST_STR_KEYS}


def _has_section(path: Path) -> bool:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return SECTION in data.get("tool", {})


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the nearest pyproject.toml at or above *start_dir* that has our table.

    *start_dir* defaults to the current directory. Unreadable or malformed
    files are passed over.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file() and _has_section(candidate):
            return candidate
    return None


def _check_value(key: str, value: object) -> None:
    if key in _LIST_STR_KEYS:
        if not isinstance(value, list):
            raise ConfigError(
                f"Config key {key!r} expects a list of strings, "
                f"got {type(value).__name__}"
            )
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise ConfigError(
                    f"Config key {key!r} expects a list of strings, "
                    f"but element {i} is {type(item).__name__}"
                )
        return

    expected_type = _SCALAR_KEYS[key]
    # bool passes isinstance(..., int).
    if expected_type is int and isinstance(value, bool):
        raise ConfigError(f"Config key {key!r} expects an integer, got a boolean")
    if not isinstance(value, expected_type):
        raise ConfigError(
            f"Config key {key!r} expects {expected_type.__name__}, "
            f"got {type(value).__name__}"
        )
    if key == "line-length" and value <= 0:  # type: ignore[operator]
        raise ConfigError(f"Config key {key!r} must be positive, got {value}")


def load_config(config_path: Path | None = None) -> dict:
    """Load and validate ``[tool.pyimports]`` from *config_path*.

    When *config_path* is ``None`` the file is located with
    :func:`find_config_file`; no file means an empty ``dict``. An explicitly
    named file that cannot be read or parsed, an unknown key, or a value of
    the wrong type raises :class:`ConfigError`.
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"cannot load {config_path}: {exc}") from exc

    section = data.get("tool", {}).get(SECTION, {})
    for key, value in section.items():
        if key not in VALID_KEYS:
            raise ConfigError(f"Unknown config key: {key!r}")
        _check_value(key, value)
    return dict(section)
