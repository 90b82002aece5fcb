# flake8: noqa
import sys
from pathlib import Path

# Ensure project root is on sys.path so `pantry_chef` can be imported when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import pytest

from pantry_chef.normalize import is_ingredient_match, normalize_all, normalize_ingredient


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Tomatoes ", "tomatoe"),
        ("  Eggs", "egg"),
        ("FLOUR", "flour"),
        ("olive oil", "olive oil"),
        ("glass", "glas"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_ingredient(raw, expected):
    assert normalize_ingredient(raw) == expected


def test_normalize_strips_only_one_trailing_s():
    assert normalize_ingredient("bass") == "bas"


def test_normalize_trims_before_singularizing():
    # the trailing space must not protect the "s"
    assert normalize_ingredient("Onions\n") == "onion"


def test_normalize_all_builds_set():
    assert normalize_all(["Eggs", "egg", "Milk "]) == {"egg", "milk"}


def test_is_ingredient_match_is_exact():
    have = normalize_all(["olive oil"])
    assert is_ingredient_match("Olive Oil", have)
    # no substring matching
    assert not is_ingredient_match("oil", have)
