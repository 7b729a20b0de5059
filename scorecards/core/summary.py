"""Read event settings from the summary table.

The summary table comes in two shapes:
  - positional, as on the spreadsheet's "Summary" sheet: values in column B of
    rows 1-5 (event name, number of climbs, number of attempts, event type,
    scoring notes)
  - a mapping with keys event_name, num_climbs, num_attempts, event_type,
    scoring_notes (JSON summaries)
"""

from .models import EVENT_TYPES, ConfigError, EventConfig, cell_text, parse_int


FIELDS = ['event_name', 'num_climbs', 'num_attempts', 'event_type', 'scoring_notes']

# Aliases accepted in column A of a positional summary
FIELD_ALIASES = {
    'event name': 'event_name',
    'competition': 'event_name',
    'number of routes': 'num_climbs',
    'number of climbs': 'num_climbs',
    'number of boulders': 'num_climbs',
    'number of attempts': 'num_attempts',
    'attempts': 'num_attempts',
    'event type': 'event_type',
    'scoring notes': 'scoring_notes',
    'scoring': 'scoring_notes',
}

MISSING_FIELDS_MESSAGE = (
    'Please fill in Event Name (B1), Number of Routes (B2), '
    'Number of Attempts (B3), and Event Type (B4) in the Summary sheet.'
)
BAD_EVENT_TYPE_MESSAGE = 'Event Type (B4) must be either "boulder" or "rope".'


def _values_from_rows(rows: list) -> dict:
    """Map summary rows to field values.

    Each field is taken from the row whose label (column A) names it; a
    field whose label is missing or unknown falls back to its position,
    B1..B5.
    """
    labelled = {}
    positional = {}
    for idx, row in enumerate(rows):
        cells = list(row)
        if len(cells) < 2:
            continue
        label = cell_text(cells[0]).strip().rstrip(':').lower()
        key = FIELD_ALIASES.get(label)
        if key is not None:
            labelled.setdefault(key, cells[1])
        if idx < len(FIELDS):
            positional[FIELDS[idx]] = cells[1]
    return {**positional, **labelled}


def read_event_config(table) -> EventConfig:
    """Build an EventConfig, raising ConfigError on missing or bad values."""
    if isinstance(table, dict):
        values = {k: table.get(k) for k in FIELDS}
    else:
        values = _values_from_rows(table)

    event_name = cell_text(values.get('event_name')).strip()
    num_climbs, climbs_ok = parse_int(values.get('num_climbs'))
    num_attempts, attempts_ok = parse_int(values.get('num_attempts'))
    event_type = cell_text(values.get('event_type')).strip().lower()

    if (not event_name or not event_type
            or not climbs_ok or num_climbs <= 0
            or not attempts_ok or num_attempts <= 0):
        raise ConfigError(MISSING_FIELDS_MESSAGE)

    if event_type not in EVENT_TYPES:
        raise ConfigError(BAD_EVENT_TYPE_MESSAGE)

    return EventConfig(
        event_name=event_name,
        num_climbs=num_climbs,
        num_attempts=num_attempts,
        event_type=event_type,
        scoring_notes=cell_text(values.get('scoring_notes')).strip(),
    )
