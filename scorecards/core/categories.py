"""Competition category ordering.

A category is a gender code followed by an age, e.g. "F12", "M40", "U".
Categories sort by gender first (F < M < U < anything else), then by age
ascending so the youngest group of each gender comes first.
"""

from .models import parse_int


GENDER_RANK = {'F': 0, 'M': 1, 'U': 2}
UNKNOWN_GENDER_RANK = 3


def category_key(category) -> tuple[int, int]:
    """Return the (gender rank, age) sort key for a category string.

    Malformed categories never raise: an unknown gender code gets rank 3
    and a missing or non-numeric age counts as 0.
    """
    text = '' if category is None else str(category)
    gender = text[:1]
    age, _ = parse_int(text[1:])
    return GENDER_RANK.get(gender, UNKNOWN_GENDER_RANK), age


def compare_categories(cat_a, cat_b) -> int:
    """Three-way compare two categories: -1, 0 or 1."""
    key_a = category_key(cat_a)
    key_b = category_key(cat_b)
    return (key_a > key_b) - (key_a < key_b)
