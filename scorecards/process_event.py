#!/usr/bin/env python3
"""CLI entry point for generating climbing competition scorecards.

Usage:
    python process_event.py --summary summary.csv --climbs climbs.csv \\
        --registration registration.csv --output ./output/
"""

import argparse
import os
import sys

# Add parent directory to path for imports (skip when frozen by PyInstaller)
if not getattr(sys, 'frozen', False):
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from scorecards.adapters.table_adapter import TableAdapter
from scorecards.core.models import ScorecardError
from scorecards.core.output_generator import format_run_summary
from scorecards.core.pipeline import CARDS_FILENAME, generate_event
from scorecards.core.registration import find_ticket_columns, normalize_row


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Generate climbing scorecards and check-in lists')
    parser.add_argument('--summary', required=True,
                        help='Summary table: event name, climbs, attempts, event type, notes')
    parser.add_argument('--climbs', required=True,
                        help='Climb assignment table: category, comma-separated climbs')
    parser.add_argument('--registration', required=True,
                        help='Registration export with ticket columns')
    parser.add_argument('--output', required=True, help='Output directory for generated files')
    parser.add_argument('--delimiter', default=None,
                        help='Field delimiter for the registration export (default: comma, tab for .tsv)')
    parser.add_argument('--cards-name', default=CARDS_FILENAME,
                        help=f'File name for the scorecard PDF (default {CARDS_FILENAME})')

    args = parser.parse_args(argv)

    try:
        summary = TableAdapter('Summary', allow_mapping=True).parse(args.summary)
        climbs = TableAdapter('Climbs').parse(args.climbs)
        print(f"Parsing {args.registration}...")
        registration = TableAdapter('Registration', delimiter=args.delimiter).parse(args.registration)
        print(f"Read {max(len(registration) - 1, 0)} registration rows")
        if registration:
            tickets = find_ticket_columns(normalize_row(registration[0]))
            print(f"Found {len(tickets)} ticket columns: "
                  f"{', '.join(category for _, category in tickets)}")

        result = generate_event(summary, climbs, registration, args.output,
                                cards_filename=args.cards_name)
    except ScorecardError as e:
        print(f"Error: {e}")
        sys.exit(1)

    for path in result.artifacts:
        print(f"Generated {path}")

    print()
    print(format_run_summary(result))
    print("\nDone!")


if __name__ == '__main__':
    main()
