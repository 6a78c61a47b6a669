import pytest

from giniforest import Dataset


FRUIT_COLUMNS = ["color", "diameter", "shape", "label"]
FRUIT_ROWS = [
    ("yellow", 4, "round", "apple"),
    ("green", 5, "long", "cucumber"),
    ("green", 10, "round", "watermelon"),
    ("yellow", 3.5, "round", "lemon"),
    ("red", 3, "round", "apple"),
]


@pytest.fixture
def fruit():
    """The five-row fruit dataset used throughout the docs."""
    return Dataset(FRUIT_COLUMNS, FRUIT_ROWS)
