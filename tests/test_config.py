import pytest

from pyimports.config import ConfigError, find_config_file, load_config

MINIMAL_PYPROJECT = b"[tool.pyimports]\n"


def _write_pyproject(directory, content: bytes):
    (directory / "pyproject.toml").write_bytes(content)


class TestFindConfigFile:
    """Tests for find_config_file()."""

    def test_finds_in_start_dir(self, tmp_path):
        _write_pyproject(tmp_path, MINIMAL_PYPROJECT)
        assert find_config_file(tmp_path) == tmp_path / "pyproject.toml"

    def test_walks_up_to_parent(self, tmp_path):
        _write_pyproject(tmp_path, MINIMAL_PYPROJECT)
        child = tmp_path / "pkg" / "sub"
        child.mkdir(parents=True)
        assert find_config_file(child) == tmp_path / "pyproject.toml"

    def test_nearest_section_wins(self, tmp_path):
        _write_pyproject(tmp_path, b"[tool.pyimports]\nline-length = 100\n")
        child = tmp_path / "child"
        child.mkdir()
        _write_pyproject(child, b"[tool.pyimports]\nline-length = 79\n")
        assert find_config_file(child) == child / "pyproject.toml"

    def test_skips_file_without_section(self, tmp_path):
        _write_pyproject(tmp_path, MINIMAL_PYPROJECT)
        child = tmp_path / "child"
        child.mkdir()
        _write_pyproject(child, b"[tool.black]\nline-length = 79\n")
        assert find_config_file(child) == tmp_path / "pyproject.toml"

    def test_skips_malformed_toml(self, tmp_path):
        _write_pyproject(tmp_path, b"[tool.pyimports\nbroken")
        assert find_config_file(tmp_path) is None

    def test_uses_cwd_when_no_start_dir(self, tmp_path, monkeypatch):
        _write_pyproject(tmp_path, MINIMAL_PYPROJECT)
        monkeypatch.chdir(tmp_path)
        assert find_config_file() == tmp_path / "pyproject.toml"


class TestLoadConfig:
    """Tests for load_config()."""

    def test_loads_all_keys(self, tmp_path):
        _write_pyproject(
            tmp_path,
            b"[tool.pyimports]\n"
            b"line-length = 100\n"
            b'local = "myproj,tests"\n'
            b'srcdir = "src/myproj"\n'
            b"format-only = true\n"
            b'extend-exclude = ["gen*"]\n',
        )
        assert load_config(tmp_path / "pyproject.toml") == {
            "line-length": 100,
            "local": "myproj,tests",
            "srcdir": "src/myproj",
            "format-only": True,
            "extend-exclude": ["gen*"],
        }

    def test_empty_section_returns_empty(self, tmp_path):
        _write_pyproject(tmp_path, MINIMAL_PYPROJECT)
        assert load_config(tmp_path / "pyproject.toml") == {}

    def test_missing_section_returns_empty(self, tmp_path):
        _write_pyproject(tmp_path, b"[project]\nname = 'x'\n")
        assert load_config(tmp_path / "pyproject.toml") == {}

    def test_no_file_found_returns_empty(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pyimports.config.find_config_file", lambda: None)
        assert load_config(None) == {}

    def test_unknown_key_raises(self, tmp_path):
        _write_pyproject(tmp_path, b"[tool.pyimports]\nbogus = 42\n")
        with pytest.raises(ConfigError, match="Unknown config key"):
            load_config(tmp_path / "pyproject.toml")

    def test_wrong_type_raises(self, tmp_path):
        _write_pyproject(tmp_path, b'[tool.pyimports]\nline-length = "eighty"\n')
        with pytest.raises(ConfigError, match="expects int"):
            load_config(tmp_path / "pyproject.toml")

    def test_bool_is_not_an_int(self, tmp_path):
        _write_pyproject(tmp_path, b"[tool.pyimports]\nline-length = true\n")
        with pytest.raises(ConfigError, match="got a boolean"):
            load_config(tmp_path / "pyproject.toml")

    def test_non_positive_line_length_raises(self, tmp_path):
        _write_pyproject(tmp_path, b"[tool.pyimports]\nline-length = 0\n")
        with pytest.raises(ConfigError, match="must be positive"):
            load_config(tmp_path / "pyproject.toml")

    def test_exclude_must_be_list(self, tmp_path):
        _write_pyproject(tmp_path, b'[tool.pyimports]\nextend-exclude = "gen"\n')
        with pytest.raises(ConfigError, match="list of strings"):
            load_config(tmp_path / "pyproject.toml")

    def test_exclude_elements_must_be_strings(self, tmp_path):
        _write_pyproject(tmp_path, b'[tool.pyimports]\nextend-exclude = ["a", 1]\n')
        with pytest.raises(ConfigError, match="element 1 is int"):
            load_config(tmp_path / "pyproject.toml")

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot load"):
            load_config(tmp_path / "nope.toml")

    def test_explicit_malformed_file_raises(self, tmp_path):
        _write_pyproject(tmp_path, b"[tool.pyimports\nbroken")
        with pytest.raises(ConfigError, match="cannot load"):
            load_config(tmp_path / "pyproject.toml")
