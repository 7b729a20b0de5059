"""Data models for the climbing competition scorecard generator."""

import re
from dataclasses import dataclass, field


MAX_ATTEMPTS = 10           # Attempt columns always reserved on a card
EVENT_TYPES = ('boulder', 'rope')

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


class ScorecardError(Exception):
    """Base class for errors that abort a whole run."""


class InputError(ScorecardError):
    """A required input table is missing or holds no usable climbers."""


class ConfigError(ScorecardError):
    """The event summary is incomplete or invalid."""


def parse_int(value) -> tuple[int, bool]:
    """Parse the leading integer of a cell value.

    Returns (value, True) on success and (0, False) when no integer could
    be read, so callers decide explicitly what a failed parse means.
    """
    if isinstance(value, bool) or value is None:
        return 0, False
    if isinstance(value, int):
        return value, True
    if isinstance(value, float):
        if value != value or value in (float('inf'), float('-inf')):
            return 0, False
        return int(value), True
    match = _LEADING_INT.match(str(value))
    if not match:
        return 0, False
    return int(match.group(1)), True


def cell_text(value) -> str:
    """Render a raw table cell as text ('' for missing cells)."""
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class ClimberRecord:
    """One registered climber, ready for ordering and layout."""
    first_name: str
    last_name: str
    full_name: str
    bib: str
    category: str          # "F12", "M40", "U"
    session: str           # "3", or the raw ticket text when it has no digits


@dataclass(frozen=True)
class SkipReason:
    """A climber that was left out of the output, and why."""
    name: str
    category: str | None
    reason: str

    @property
    def display_category(self) -> str:
        return self.category or 'Unknown'


@dataclass
class EventConfig:
    """Event-wide settings read from the summary table."""
    event_name: str
    num_climbs: int
    num_attempts: int
    event_type: str            # "boulder" or "rope"
    scoring_notes: str = ''

    @property
    def attempts_shown(self) -> int:
        return min(self.num_attempts, MAX_ATTEMPTS)

    @property
    def climb_prefix(self) -> str:
        return 'Climb' if self.event_type == 'rope' else 'Boulder'


@dataclass
class RegistrationResult:
    valid_climbers: list = field(default_factory=list)
    skipped_climbers: list = field(default_factory=list)
    ticket_categories: list = field(default_factory=list)


@dataclass
class RunSummary:
    """What one run produced, for reporting back to the operator."""
    cards_generated: int
    skipped: list = field(default_factory=list)
    warnings: list = field(default_factory=list)
    rosters: list = field(default_factory=list)
    artifacts: list = field(default_factory=list)
