"""Scorecard layout engine.

Lays out one fixed-width card per climber on a paginated grid, two cards
per printed page. The grid is a CardSheet: an in-memory surface that
records positioned, styled cells and row heights. Renderers (see
pdf_generator) read the sheet back; the layout never draws anything itself.

Card rows, top to bottom:
  - Competition name                              1 unit
  - Climber name (large)                          2 units
  - Category / Session / Bib # (large)            2 units
  - Blank spacer                                  1 unit
  - One row per climb, with attempt boxes         2 units each
  - Blank + "Scoring:" notes row, if notes given  2 units

Each card is then padded to a fixed height so pairs line up on a page:
the first card of a pair to 33 units plus one row, the second to 34 units
plus a 2-row gap before the next pair (omitted after the last card).
"""

from dataclasses import dataclass, field, replace

from .models import MAX_ATTEMPTS, ClimberRecord, EventConfig, SkipReason


CARD_WIDTH_COLS = 1 + MAX_ATTEMPTS   # climb label + attempt boxes
STANDARD_ROW_HEIGHT = 21             # points per row unit
FIRST_CARD_TARGET = 33
SECOND_CARD_TARGET = 34
PAIR_GAP_ROWS = 2

LARGE_FONT_SIZE = 16
ATTEMPT_FONT_SIZE = 10
ATTEMPT_COLOR = '#cccccc'

NO_CLIMBS_REASON = 'No climbs assigned to category'


@dataclass(frozen=True)
class Cell:
    """One styled value on the sheet; span > 1 merges columns to the right."""
    row: int
    col: int
    value: str
    span: int = 1
    bold: bool = False
    font_size: int | None = None
    color: str | None = None
    halign: str | None = None      # 'left', 'center', 'right'
    valign: str | None = None      # 'top', 'middle', 'bottom'
    border: bool = False
    wrap: bool = False


@dataclass
class CardRow:
    height: int = 1
    cells: list = field(default_factory=list)


@dataclass(frozen=True)
class CardPlacement:
    climber: ClimberRecord
    card_number: int      # 1-based, counts successful cards only
    start_row: int
    end_row: int          # first row after the card's padding and gaps
    rows_used: int        # row units before padding


@dataclass
class LayoutResult:
    placements: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    @property
    def cards_generated(self) -> int:
        return len(self.placements)


class CardSheet:
    """Grid of styled cells with per-row heights (in row units)."""

    def __init__(self, width: int = CARD_WIDTH_COLS):
        self.width = width
        self.cells = {}
        self.row_heights = {}
        self.last_row = 0

    def set_cell(self, cell: Cell):
        if cell.row < 1 or cell.col < 1 or cell.col + cell.span - 1 > self.width:
            raise ValueError(f'Cell ({cell.row}, {cell.col}) span {cell.span} '
                             f'is outside the {self.width}-column sheet')
        self.cells[(cell.row, cell.col)] = cell
        self.last_row = max(self.last_row, cell.row)

    def set_row_height(self, row: int, units: int):
        self.row_heights[row] = units
        self.last_row = max(self.last_row, row)

    def row_height(self, row: int) -> int:
        return self.row_heights.get(row, 1)

    def row_cells(self, row: int) -> list[Cell]:
        return [self.cells[(row, col)] for col in range(1, self.width + 1)
                if (row, col) in self.cells]

    def clear_rows(self, start_row: int, end_row: int):
        """Remove cells and heights in rows [start_row, end_row)."""
        for key in [k for k in self.cells if start_row <= k[0] < end_row]:
            del self.cells[key]
        for row in [r for r in self.row_heights if start_row <= r < end_row]:
            del self.row_heights[row]


def build_card_rows(climber: ClimberRecord, climbs: list[str],
                    config: EventConfig) -> list[CardRow]:
    """Build the rows of one card, with cell rows left at 0 for placement."""
    last_col = CARD_WIDTH_COLS
    rows = []

    rows.append(CardRow(1, [
        Cell(0, 1, 'Competition:', bold=True),
        Cell(0, 2, config.event_name, span=last_col - 1),
    ]))

    rows.append(CardRow(2, [
        Cell(0, 1, 'Name:', bold=True, font_size=LARGE_FONT_SIZE),
        Cell(0, 2, climber.full_name, span=last_col - 1, font_size=LARGE_FONT_SIZE),
    ]))

    rows.append(CardRow(2, [
        Cell(0, 1, 'Category:', bold=True, font_size=LARGE_FONT_SIZE),
        Cell(0, 2, climber.category, span=2, font_size=LARGE_FONT_SIZE),
        Cell(0, 4, 'Session:', bold=True, font_size=LARGE_FONT_SIZE),
        Cell(0, 5, climber.session, span=2, font_size=LARGE_FONT_SIZE, halign='left'),
        Cell(0, 7, 'Bib #:', bold=True, font_size=LARGE_FONT_SIZE),
        Cell(0, 8, climber.bib, span=last_col - 7, font_size=LARGE_FONT_SIZE, halign='left'),
    ]))

    rows.append(CardRow(1))

    for climb in climbs[:config.num_climbs]:
        cells = [Cell(0, 1, f'{config.climb_prefix}: {climb}',
                      bold=True, valign='middle', border=True)]
        for attempt in range(1, config.attempts_shown + 1):
            cells.append(Cell(0, 1 + attempt, str(attempt),
                              font_size=ATTEMPT_FONT_SIZE, color=ATTEMPT_COLOR,
                              halign='left', valign='top', border=True))
        rows.append(CardRow(2, cells))

    if config.scoring_notes.strip():
        rows.append(CardRow(1))
        rows.append(CardRow(1, [
            Cell(0, 1, 'Scoring:', bold=True),
            Cell(0, 2, config.scoring_notes, span=last_col - 1, wrap=True),
        ]))

    return rows


def rows_used(rows: list[CardRow]) -> int:
    return sum(row.height for row in rows)


def _place_card(sheet: CardSheet, start_row: int, climber: ClimberRecord,
                climbs: list[str], config: EventConfig):
    """Write one card at start_row.

    Returns (physical rows, row units) on success or a SkipReason when the
    card could not be built or written. A failed card leaves its rows empty.
    """
    try:
        rows = build_card_rows(climber, climbs, config)
        placed = []
        heights = []
        for offset, card_row in enumerate(rows):
            row = start_row + offset
            placed.extend(replace(cell, row=row) for cell in card_row.cells)
            if card_row.height != 1:
                heights.append((row, card_row.height))
    except Exception as exc:
        return SkipReason(name=climber.full_name, category=climber.category,
                          reason=f'Error: {exc}')

    try:
        for cell in placed:
            sheet.set_cell(cell)
        for row, height in heights:
            sheet.set_row_height(row, height)
    except Exception as exc:
        sheet.clear_rows(start_row, start_row + len(rows))
        return SkipReason(name=climber.full_name, category=climber.category,
                          reason=f'Error: {exc}')
    return len(rows), rows_used(rows)


def layout_scorecards(sheet: CardSheet, climbers: list[ClimberRecord],
                      assignments: dict[str, list[str]],
                      config: EventConfig) -> LayoutResult:
    """Lay out cards for climbers (already in competition order).

    A climber whose category has no climbs is skipped without using any
    rows. A failure on one climber is recorded as a skip and layout moves
    on to the next. Cards taller than their padding target are kept and
    reported in LayoutResult.warnings.
    """
    result = LayoutResult()
    planned = sum(1 for c in climbers if assignments.get(c.category))
    current_row = 1
    successful = 0
    errors = 0

    for climber in climbers:
        climbs = assignments.get(climber.category) or []
        if not climbs:
            result.skipped.append(SkipReason(
                name=climber.full_name, category=climber.category,
                reason=NO_CLIMBS_REASON))
            continue

        outcome = _place_card(sheet, current_row, climber, climbs, config)
        if isinstance(outcome, SkipReason):
            result.skipped.append(outcome)
            errors += 1
            continue

        physical_rows, used = outcome
        start_row = current_row
        current_row += physical_rows

        is_first_of_pair = successful % 2 == 0
        target = FIRST_CARD_TARGET if is_first_of_pair else SECOND_CARD_TARGET
        padding = target - used
        if padding > 0:
            current_row += padding
        elif padding < 0:
            result.warnings.append(
                f'Card {successful + 1} ({climber.full_name}) is {-padding} rows too tall')

        if is_first_of_pair:
            current_row += 1
        elif successful < planned - errors - 1:
            current_row += PAIR_GAP_ROWS

        successful += 1
        result.placements.append(CardPlacement(
            climber=climber,
            card_number=successful,
            start_row=start_row,
            end_row=current_row,
            rows_used=used,
        ))

    return result
