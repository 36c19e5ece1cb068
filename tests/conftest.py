"""
pytest configuration for the hedge fund API test suite.

Marks:
  @pytest.mark.unit    — fast, in-process, no subprocesses
  @pytest.mark.slow    — spawns real Python subprocesses (fake analysis programs)

Run subsets:
  pytest tests/ -m unit              # fast unit tests only
  pytest tests/ -m "not slow"        # everything except subprocess tests
"""
import os
import sys
import textwrap

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast unit tests, no subprocesses")
    config.addinivalue_line("markers", "slow: spawns real Python subprocesses")


# Stand-in for the analysis programs: log noise, a progress object, a broken
# line, then the real result echoing the arguments it was given.
_FAKE_PROGRAM = """
import json, os, sys
counter = os.environ.get("FAKE_ANALYSIS_COUNTER")
if counter:
    with open(counter, "a") as fh:
        fh.write("run\\n")
print("starting {name}...")
print('{{"progress": 50}}')
print("{{not json")
print(json.dumps({{"script": "{name}", "argv": sys.argv[1:]}}))
"""


@pytest.fixture
def write_script(tmp_path):
    """Write a throwaway Python program and return its path."""
    def _write(name: str, body: str) -> str:
        path = tmp_path / name
        path.write_text(textwrap.dedent(body))
        return str(path)
    return _write


@pytest.fixture
def fake_script_dir(tmp_path):
    """Directory holding fake main.py and backtester.py programs."""
    script_dir = tmp_path / "programs"
    script_dir.mkdir()
    for name in ("main", "backtester"):
        (script_dir / f"{name}.py").write_text(_FAKE_PROGRAM.format(name=name))
    return str(script_dir)
