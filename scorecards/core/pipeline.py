"""Run orchestration: input tables in, scorecards and check-in lists out.

Fatal problems (a missing table, an invalid summary, no registered
climbers) raise before anything is written. Per-climber problems are
collected as skip reasons and reported with the results.
"""

import os

from .check_in_generator import generate_check_in_pdf
from .climbs import parse_climb_assignments
from .layout import CardSheet, layout_scorecards
from .models import InputError, RunSummary
from .ordering import sort_climbers
from .output_generator import write_roster_csvs
from .pdf_generator import generate_scorecards_pdf
from .registration import parse_registrations
from .rosters import build_rosters
from .summary import read_event_config


CARDS_FILENAME = 'queue_cards.pdf'
CHECK_IN_FILENAME = 'check_in_lists.pdf'


def _require(table, name: str):
    if table is None:
        raise InputError(f'Could not find "{name}" table. Please create it first.')
    return table


def generate_event(summary_table, climbs_table, registration_table,
                   output_dir: str, sheet: CardSheet | None = None,
                   cards_filename: str = CARDS_FILENAME) -> RunSummary:
    """Generate scorecards and check-in lists for one event.

    Args:
        summary_table: Summary rows (or a dict of settings).
        climbs_table: Climb assignment rows, header first.
        registration_table: Registration export rows, header first.
        output_dir: Directory for the generated files (created if needed).
        sheet: Card surface to lay out on; a fresh CardSheet by default.
        cards_filename: File name of the scorecard PDF.

    Returns:
        RunSummary with card count, skip reasons, warnings and file paths.

    Raises:
        InputError: a table is missing or no climbers are registered.
        ConfigError: the summary is incomplete or has a bad event type.
    """
    config = read_event_config(_require(summary_table, 'Summary'))
    assignments = parse_climb_assignments(_require(climbs_table, 'Climbs'))
    registrations = parse_registrations(_require(registration_table, 'Registration'))

    if not registrations.valid_climbers:
        raise InputError('No registered climbers found.')

    climbers = sort_climbers(registrations.valid_climbers)

    sheet = sheet if sheet is not None else CardSheet()
    layout = layout_scorecards(sheet, climbers, assignments, config)
    rosters = build_rosters(climbers)

    os.makedirs(output_dir, exist_ok=True)
    cards_path = os.path.join(output_dir, cards_filename)
    generate_scorecards_pdf(sheet, layout.placements, cards_path)

    check_in_path = os.path.join(output_dir, CHECK_IN_FILENAME)
    generate_check_in_pdf(rosters, check_in_path)
    roster_paths = write_roster_csvs(rosters, output_dir)

    return RunSummary(
        cards_generated=layout.cards_generated,
        skipped=registrations.skipped_climbers + layout.skipped,
        warnings=layout.warnings,
        rosters=rosters,
        artifacts=[cards_path, check_in_path] + roster_paths,
    )
