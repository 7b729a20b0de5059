"""Tests for the parsing and ordering core.

Covers category ordering, climb assignment and registration parsing,
competition ordering, check-in rosters and the event summary reader.
"""

import itertools
import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from scorecards.core.categories import category_key, compare_categories
from scorecards.core.climbs import parse_climb_assignments
from scorecards.core.models import ClimberRecord, ConfigError, parse_int
from scorecards.core.ordering import sort_climbers
from scorecards.core.registration import (
    NO_SESSION_REASON, NO_TICKET_REASON, find_ticket_columns,
    normalize_row, parse_registrations,
)
from scorecards.core.rosters import ROSTER_HEADER, build_rosters
from scorecards.core.summary import read_event_config


HEADER = ['firstname', 'lastname', 'bib', 'F10 boulder ticket',
          'F10 boulder ticket status', 'M10 boulder ticket', 'U lead ticket']


def climber(first, last, category, session, bib=''):
    return ClimberRecord(first_name=first, last_name=last,
                         full_name=f'{first} {last}'.strip(), bib=bib,
                         category=category, session=session)


# ─── Parse helpers ──────────────────────────────────────────────────

class TestParseInt:
    def test_leading_digits(self):
        assert parse_int('12abc') == (12, True)
        assert parse_int(' 40') == (40, True)

    def test_failure_defaults_to_zero(self):
        assert parse_int('abc') == (0, False)
        assert parse_int('') == (0, False)
        assert parse_int(None) == (0, False)

    def test_numeric_cells(self):
        assert parse_int(3) == (3, True)
        assert parse_int(3.0) == (3, True)


# ─── Category comparator ────────────────────────────────────────────

CATEGORIES = ['F10', 'F12', 'F40', 'M10', 'M12', 'M40', 'U', 'U16',
              'X12', 'Open', '', 'F', 'M12+', 'f10']


class TestCategoryComparator:
    def test_gender_rank_beats_age(self):
        assert compare_categories('F40', 'M10') < 0
        assert compare_categories('M40', 'U10') < 0
        assert compare_categories('U99', 'X1') < 0

    def test_younger_first_within_gender(self):
        assert compare_categories('F10', 'F12') == -1
        assert compare_categories('M40', 'M12') == 1

    def test_reflexive_zero(self):
        for cat in CATEGORIES:
            assert compare_categories(cat, cat) == 0

    def test_transitive(self):
        for a, b, c in itertools.permutations(CATEGORIES, 3):
            if compare_categories(a, b) < 0 and compare_categories(b, c) < 0:
                assert compare_categories(a, c) < 0

    def test_antisymmetric(self):
        for a, b in itertools.permutations(CATEGORIES, 2):
            assert compare_categories(a, b) == -compare_categories(b, a)

    def test_malformed_input_does_not_raise(self):
        assert category_key('') == (3, 0)
        assert category_key('F') == (0, 0)
        assert category_key('Mxx') == (1, 0)
        assert category_key(None) == (3, 0)

    def test_unknown_gender_ties_with_other_unknowns(self):
        assert compare_categories('X12', 'Open') > 0   # same rank, 12 > 0
        assert compare_categories('f10', 'F10') > 0    # codes are case-sensitive


# ─── Climb assignments ──────────────────────────────────────────────

class TestClimbAssignments:
    def test_split_and_trim(self):
        table = [['Category', 'Climbs'], ['F12', '101, 102, 103']]
        assert parse_climb_assignments(table) == {'F12': ['101', '102', '103']}

    def test_header_row_skipped(self):
        table = [['F12', '1,2'], ['M12', '3']]
        assert parse_climb_assignments(table) == {'M12': ['3']}

    def test_empty_cells_skipped(self):
        table = [['Category', 'Climbs'], ['F12', ''], ['', '1,2'], ['M12']]
        assert parse_climb_assignments(table) == {}

    def test_empty_tokens_preserved(self):
        table = [['Category', 'Climbs'], ['F12', '101,,103']]
        assert parse_climb_assignments(table) == {'F12': ['101', '', '103']}

    def test_last_row_wins_and_category_trimmed(self):
        table = [['Category', 'Climbs'], ['F12 ', '1'], [' F12', '2, 2']]
        assert parse_climb_assignments(table) == {'F12': ['2', '2']}

    def test_numeric_cells(self):
        table = [['Category', 'Climbs'], ['F12', 7]]
        assert parse_climb_assignments(table) == {'F12': ['7']}


# ─── Registration parsing ───────────────────────────────────────────

class TestRowNormalization:
    def test_packed_row_is_split(self):
        assert normalize_row(['a;b;c']) == ['a', 'b', 'c']

    def test_split_row_kept(self):
        assert normalize_row(['a', 'b', 'c']) == ['a', 'b', 'c']

    def test_numeric_first_cell(self):
        assert normalize_row([1, 'x;y']) == [1, 'x;y']


class TestTicketColumns:
    def test_detects_suffixes_and_ignores_status(self):
        assert find_ticket_columns(HEADER) == [(3, 'F10'), (5, 'M10'), (6, 'U')]

    def test_rope_ticket(self):
        assert find_ticket_columns(['F16 rope ticket']) == [(0, 'F16')]


class TestRegistrationParser:
    def test_valid_climber(self):
        rows = [HEADER, ['Ada', 'Lovelace', '17', 'Session 3 - Sat', '', '', '']]
        result = parse_registrations(rows)
        assert result.skipped_climbers == []
        assert result.valid_climbers == [
            climber('Ada', 'Lovelace', 'F10', '3', bib='17')]
        assert result.ticket_categories == ['F10', 'M10', 'U']

    def test_blank_name_row_ignored(self):
        rows = [HEADER, ['', '', '5', 'Session 1', '', '', '']]
        result = parse_registrations(rows)
        assert result.valid_climbers == []
        assert result.skipped_climbers == []

    def test_named_row_without_ticket(self):
        rows = [HEADER, ['Ada', 'Lovelace', '17', '', 'paid', ' ', '']]
        result = parse_registrations(rows)
        assert result.valid_climbers == []
        assert len(result.skipped_climbers) == 1
        skipped = result.skipped_climbers[0]
        assert skipped.reason == NO_TICKET_REASON
        assert skipped.reason == 'No registration/ticket information found'
        assert skipped.category is None
        assert skipped.display_category == 'Unknown'
        assert skipped.name == 'Ada Lovelace'

    def test_first_ticket_wins(self):
        rows = [HEADER, ['Max', 'Planck', '', '', '', 'Session 2', 'Session 4']]
        result = parse_registrations(rows)
        assert [(c.category, c.session) for c in result.valid_climbers] == [('M10', '2')]

    def test_session_falls_back_to_raw_text(self):
        rows = [HEADER, ['Max', 'Planck', '', '', '', '', 'Morning']]
        result = parse_registrations(rows)
        assert result.valid_climbers[0].session == 'Morning'

    def test_status_column_not_a_ticket(self):
        rows = [HEADER, ['Max', 'Planck', '', '', 'Session 9', '', '']]
        result = parse_registrations(rows)
        assert result.valid_climbers == []
        assert result.skipped_climbers[0].reason == NO_TICKET_REASON

    def test_missing_columns_degrade_to_empty(self):
        header = ['lastname', 'F10 boulder ticket']
        result = parse_registrations([header, ['Curie', 'S1']])
        assert result.valid_climbers == [climber('', 'Curie', 'F10', '1')]

    def test_short_row(self):
        result = parse_registrations([HEADER, ['Ada']])
        assert result.skipped_climbers[0].name == 'Ada'

    def test_mixed_packed_and_split_rows(self):
        rows = [
            [';'.join(HEADER)],
            ['Ada;Lovelace;17;Session 3;;;'],
            ['Max', 'Planck', '8', '', '', 'S2', ''],
        ]
        result = parse_registrations(rows)
        assert [(c.full_name, c.category, c.session, c.bib)
                for c in result.valid_climbers] == [
            ('Ada Lovelace', 'F10', '3', '17'),
            ('Max Planck', 'M10', '2', '8'),
        ]

    def test_reparse_is_identical(self):
        rows = [HEADER,
                ['Ada', 'Lovelace', '17', 'S3', '', '', ''],
                ['Max', 'Planck', '8', '', '', 'S2', ''],
                ['No', 'Ticket', '', '', '', '', '']]
        assert parse_registrations(rows) == parse_registrations(rows)

    def test_session_reason_string(self):
        assert NO_SESSION_REASON == 'No session information found'

    def test_header_only(self):
        result = parse_registrations([HEADER])
        assert result.valid_climbers == [] and result.skipped_climbers == []


# ─── Ordering ───────────────────────────────────────────────────────

class TestOrdering:
    def test_session_category_last_name(self):
        climbers = [
            climber('A', 'Zed', 'M10', '2'),
            climber('B', 'Young', 'F12', '1'),
            climber('C', 'Xu', 'F10', '2'),
            climber('D', 'Abel', 'M10', '2'),
            climber('E', 'Moss', 'U', '1'),
        ]
        ordered = [c.last_name for c in sort_climbers(climbers)]
        assert ordered == ['Young', 'Moss', 'Xu', 'Abel', 'Zed']

    def test_sessions_compared_numerically(self):
        climbers = [climber('A', 'A', 'F10', '10'), climber('B', 'B', 'F10', '9')]
        assert [c.session for c in sort_climbers(climbers)] == ['9', '10']

    def test_non_numeric_session_sorts_as_zero(self):
        climbers = [climber('A', 'A', 'F10', '1'), climber('B', 'B', 'F10', 'Morning')]
        assert [c.session for c in sort_climbers(climbers)] == ['Morning', '1']

    def test_last_name_ignores_case_and_accents(self):
        climbers = [climber('A', 'zimmer', 'F10', '1'), climber('B', 'Émile', 'F10', '1'),
                    climber('C', 'Adams', 'F10', '1')]
        assert [c.last_name for c in sort_climbers(climbers)] == ['Adams', 'Émile', 'zimmer']

    def test_stable_for_equal_keys(self):
        first = climber('First', 'Same', 'F10', '1')
        second = climber('Second', 'Same', 'F10', '1')
        assert sort_climbers([first, second]) == [first, second]
        assert sort_climbers([second, first]) == [second, first]


# ─── Rosters ────────────────────────────────────────────────────────

class TestRosters:
    def test_one_roster_per_session_sorted_numerically(self):
        climbers = [
            climber('A', 'One', 'F10', '10'),
            climber('B', 'Two', 'M10', '2'),
            climber('C', 'Three', 'F10', '2'),
        ]
        rosters = build_rosters(climbers)
        assert [r.session for r in rosters] == ['2', '10']
        assert rosters[0].title == 'Session 2 Check-in List'
        assert rosters[0].header == ROSTER_HEADER
        assert rosters[0].rows == [
            ['C Three', 'F10', '2', '', ''],
            ['B Two', 'M10', '2', '', ''],
        ]

    def test_every_climber_in_exactly_one_roster(self):
        climbers = [climber(str(i), f'Name{i}', 'F10', str(i % 3)) for i in range(9)]
        rosters = build_rosters(climbers)
        names = [row[0] for r in rosters for row in r.rows]
        assert sorted(names) == sorted(c.full_name for c in climbers)
        for roster in rosters:
            assert all(row[2] == roster.session for row in roster.rows)

    def test_checked_in_column_blank(self):
        rosters = build_rosters([climber('A', 'B', 'F10', '1', bib='9')])
        assert rosters[0].rows[0][-1] == ''
        assert rosters[0].rows[0][3] == '9'


# ─── Event summary ──────────────────────────────────────────────────

SUMMARY_ROWS = [
    ['Event Name', 'Spring Bouldering'],
    ['Number of Routes', '5'],
    ['Number of Attempts', '12'],
    ['Event Type', ' Boulder '],
    ['Scoring Notes', 'Top = 25 pts'],
]


class TestEventSummary:
    def test_labelled_rows(self):
        config = read_event_config(SUMMARY_ROWS)
        assert config.event_name == 'Spring Bouldering'
        assert config.num_climbs == 5
        assert config.num_attempts == 12
        assert config.attempts_shown == 10
        assert config.event_type == 'boulder'
        assert config.climb_prefix == 'Boulder'
        assert config.scoring_notes == 'Top = 25 pts'

    def test_positional_rows(self):
        rows = [['', 'Lead Open'], ['', 4], ['', 3], ['', 'ROPE']]
        config = read_event_config(rows)
        assert (config.event_name, config.num_climbs, config.num_attempts) == ('Lead Open', 4, 3)
        assert config.climb_prefix == 'Climb'
        assert config.scoring_notes == ''

    def test_mapping(self):
        config = read_event_config({'event_name': 'Comp', 'num_climbs': 3,
                                    'num_attempts': 5, 'event_type': 'rope'})
        assert config.event_type == 'rope'

    def test_missing_required_value(self):
        rows = [r for r in SUMMARY_ROWS if r[0] != 'Number of Attempts']
        with pytest.raises(ConfigError, match='Please fill in'):
            read_event_config(rows)

    def test_non_numeric_count(self):
        rows = [list(r) for r in SUMMARY_ROWS]
        rows[1][1] = 'many'
        with pytest.raises(ConfigError):
            read_event_config(rows)

    def test_bad_event_type(self):
        rows = [list(r) for r in SUMMARY_ROWS]
        rows[3][1] = 'speed'
        with pytest.raises(ConfigError, match='boulder'):
            read_event_config(rows)

    def test_unknown_labels_fall_back_to_position(self):
        rows = [['Event Name', 'Comp'], ['Climbs', '5'], ['Attempts', '4'],
                ['Event Type', 'boulder']]
        config = read_event_config(rows)
        assert (config.event_name, config.num_climbs, config.num_attempts) == ('Comp', 5, 4)
        assert config.event_type == 'boulder'
