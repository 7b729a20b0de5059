"""Registration export parser.

The registration export is a wide table with one row per person and one
"ticket" column per category (e.g. "F12 boulder ticket"). A non-empty ticket
cell means the person registered in that category; the session number is
read from the cell text.

Exports arrive in two shapes, sometimes mixed within one table:
  - already split: one value per cell
  - packed: the whole row joined with ';' in the first cell
Each row is normalized on its own before any column lookup.
"""

import re

from .models import ClimberRecord, RegistrationResult, SkipReason, cell_text


PACKED_DELIMITER = ';'
TICKET_SUFFIXES = (' boulder ticket', ' lead ticket', ' rope ticket')

NO_SESSION_REASON = 'No session information found'
NO_TICKET_REASON = 'No registration/ticket information found'

_SESSION_DIGITS = re.compile(r'\d+')


def normalize_row(row) -> list:
    """Return the row as a flat list of cells, unpacking ';'-joined rows."""
    cells = list(row)
    if cells and isinstance(cells[0], str) and PACKED_DELIMITER in cells[0]:
        return cells[0].split(PACKED_DELIMITER)
    return cells


def find_ticket_columns(header: list) -> list[tuple[int, str]]:
    """Return (column index, category) for every ticket column in the header."""
    tickets = []
    for idx, value in enumerate(header):
        name = cell_text(value)
        if not name or 'status' in name:
            continue
        for suffix in TICKET_SUFFIXES:
            if name.endswith(suffix):
                tickets.append((idx, name[:-len(suffix)]))
                break
    return tickets


def _column(header: list, name: str) -> int:
    try:
        return header.index(name)
    except ValueError:
        return -1


def _cell(row: list, idx: int) -> str:
    if idx < 0 or idx >= len(row):
        return ''
    return cell_text(row[idx])


def parse_registrations(rows: list) -> RegistrationResult:
    """Split registration rows into climber records and skip reasons.

    Malformed rows never raise; they become SkipReason entries. Rows with
    neither a first nor a last name are blank and are dropped silently.
    """
    result = RegistrationResult()
    if len(rows) < 2:
        return result

    header = [cell_text(h) for h in normalize_row(rows[0])]
    firstname_idx = _column(header, 'firstname')
    lastname_idx = _column(header, 'lastname')
    bib_idx = _column(header, 'bib')
    tickets = find_ticket_columns(header)
    result.ticket_categories = [category for _, category in tickets]

    for raw_row in rows[1:]:
        row = normalize_row(raw_row)
        first_name = _cell(row, firstname_idx)
        last_name = _cell(row, lastname_idx)
        bib = _cell(row, bib_idx)
        if not first_name and not last_name:
            continue

        name = f'{first_name} {last_name}'.strip()
        found_registration = False

        # First filled ticket wins; a climber registers in one category only
        for ticket_idx, category in tickets:
            ticket_value = _cell(row, ticket_idx)
            if not ticket_value.strip():
                continue

            found_registration = True
            match = _SESSION_DIGITS.search(ticket_value)
            session = match.group(0) if match else ticket_value
            if not session.strip():
                result.skipped_climbers.append(
                    SkipReason(name=name, category=category, reason=NO_SESSION_REASON))
                break

            result.valid_climbers.append(ClimberRecord(
                first_name=first_name,
                last_name=last_name,
                full_name=name,
                bib=bib,
                category=category,
                session=session,
            ))
            break

        if not found_registration and name:
            result.skipped_climbers.append(
                SkipReason(name=name, category=None, reason=NO_TICKET_REASON))

    return result
