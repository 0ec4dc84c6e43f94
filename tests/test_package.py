"""Package metadata."""

import re
from pathlib import Path

import qcorr2d

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def test_version_matches_pyproject():
    match = re.search(r'^version\s*=\s*"([^"]+)"', PYPROJECT.read_text(encoding="utf-8"), re.M)
    assert match is not None
    assert qcorr2d.__version__ == match.group(1)
