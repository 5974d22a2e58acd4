# tests/conftest.py
# Ensure project root is importable as a module during pytest runs
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bagtree.models.tree.dataset import Record  # noqa: E402


def make_records(rows):
    """Rows are (label, value_0, value_1, ...) tuples."""
    return [Record.from_row(row) for row in rows]


@pytest.fixture
def separable_rows():
    # attribute 0 separates the labels perfectly, attribute 1 carries no information
    return [
        (1, 0, 0),
        (1, 0, 1),
        (-1, 1, 0),
        (-1, 1, 1),
    ]


@pytest.fixture
def write_records(tmp_path):
    def _write(name, rows):
        path = tmp_path / name
        path.write_text("\n".join(" ".join(str(v) for v in row) for row in rows) + "\n")
        return path
    return _write
