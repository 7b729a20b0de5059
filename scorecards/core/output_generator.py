"""Text and CSV outputs for a scorecard run.

  - Check-in lists: one CSV per session
  - Run summary: the operator-facing report of cards generated and skips
"""

import csv
import os
import re


def roster_filename(session: str) -> str:
    """'3' -> 'session_3_check_in_list.csv'; unsafe characters become '_'."""
    token = re.sub(r'[^A-Za-z0-9]+', '_', str(session)).strip('_') or 'unknown'
    return f'session_{token}_check_in_list.csv'


def write_roster_csvs(rosters: list, output_dir: str) -> list[str]:
    """Write each roster to its own CSV, overwriting earlier runs.

    Returns:
        The paths written, in roster order.
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = []
    for roster in rosters:
        path = os.path.join(output_dir, roster_filename(roster.session))
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(roster.header)
            writer.writerows(roster.rows)
        paths.append(path)
    return paths


def format_run_summary(summary, cards_name: str = 'queue cards') -> str:
    """Build the end-of-run report.

    Lists every skipped climber as "- Name (Category): reason", with
    "Unknown" standing in for a missing category.
    """
    lines = [f'Success! Generated {summary.cards_generated} scorecards in the '
             f'{cards_name} and check-in lists for each session.']

    if summary.skipped:
        lines.append('')
        lines.append(f'WARNING: {len(summary.skipped)} climber(s) were skipped '
                     f'due to errors:')
        lines.append('')
        for skipped in summary.skipped:
            lines.append(f'- {skipped.name} ({skipped.display_category}): {skipped.reason}')

    if summary.warnings:
        lines.append('')
        lines.append('Layout warnings:')
        for warning in summary.warnings:
            lines.append(f'- {warning}')

    return '\n'.join(lines)
