import pytest

from name_trends.data_analyzer import Catalog, parse_line

# --- Mock Data ---

LINES = [
    "Ava 5 3 0 1 2 4 6 7 8 9 10",
    "Gavin 0 0 0 0 0 0 0 0 900 120 40",
    "Bob 1 2 3 4 5 6 7 8 9 10 11",
    "Mary 2 1 5 0 0 0 0 0 0 0 0",
    "Anna 2 9 9 9 9 9 9 9 9 9 9",
    "bob 7 7 7 7 7 7 7 7 7 7 7",
    "Zed 0 0 0 0 0 0 0 0 0 0 0",
]


@pytest.fixture
def catalog():
    """A small catalog with a duplicate name, rank ties and an always-unranked name."""
    return Catalog([parse_line(line) for line in LINES])


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "names-data.txt"
    path.write_text("\n".join(LINES) + "\n", encoding="utf-8")
    return path
