import pytest

# fmt: off
UNSORTED = b"import sys\nimport os\n"
SORTED = b"import os\nimport sys\n"
UNFORMATTED = b"x=1\n"
FORMATTED = b"x = 1\n"
INVALID = b"def f(:\n    pass\n"
# fmt: on


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    """Run the test from inside an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
