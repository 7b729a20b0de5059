"""Competition ordering of climbers: session, then category, then last name."""

import unicodedata

from .categories import category_key
from .models import ClimberRecord, parse_int


def last_name_key(last_name: str) -> tuple[str, str]:
    """Accent- and case-insensitive name key ("Émile" sorts with "emile")."""
    decomposed = unicodedata.normalize('NFKD', last_name)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), last_name


def session_number(session) -> int:
    """Numeric value of a session token; non-numeric sessions sort as 0."""
    value, _ = parse_int(session)
    return value


def roster_sort_key(climber: ClimberRecord):
    return category_key(climber.category), last_name_key(climber.last_name)


def competition_sort_key(climber: ClimberRecord):
    return (session_number(climber.session),) + roster_sort_key(climber)


def sort_climbers(climbers: list[ClimberRecord]) -> list[ClimberRecord]:
    """Return climbers in competition order (stable for equal keys)."""
    return sorted(climbers, key=competition_sort_key)
