"""Scorecard PDF renderer.

Draws a laid-out CardSheet onto letter-size pages, one pair of cards per
page. Row heights come from the sheet (in row units); each page is scaled
so its pair fits between the margins. Supports merged cells, borders,
bold text, font sizes and colours, alignment and wrapped notes.
"""

import fitz  # PyMuPDF

from .layout import CARD_WIDTH_COLS, STANDARD_ROW_HEIGHT, CardSheet

# --- Page layout constants (letter: 612 x 792 pt) ---
PAGE_W = 612
PAGE_H = 792
MARGIN = 36
CONTENT_W = PAGE_W - 2 * MARGIN
CONTENT_H = PAGE_H - 2 * MARGIN

LABEL_COL_W = 110
ATTEMPT_COL_W = (CONTENT_W - LABEL_COL_W) / (CARD_WIDTH_COLS - 1)
COL_WIDTHS = [LABEL_COL_W] + [ATTEMPT_COL_W] * (CARD_WIDTH_COLS - 1)

CARDS_PER_PAGE = 2

DEFAULT_FONT_SIZE = 10
MIN_FONT_SIZE = 5
FONT_BOOST = 1.4           # text shrinks less than row heights when scaled
CELL_PAD = 2

FONT_REGULAR = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'

BLACK = (0, 0, 0)
BORDER_WIDTH = 0.5


def generate_scorecards_pdf(sheet: CardSheet, placements: list, output_path: str):
    """Render the card sheet to a PDF.

    Args:
        sheet: CardSheet filled by layout_scorecards().
        placements: CardPlacement list from the same layout pass.
        output_path: Where to save the PDF.

    Returns:
        Number of pages written.
    """
    doc = fitz.open()
    if not placements:
        doc.new_page(width=PAGE_W, height=PAGE_H)
        doc.save(output_path)
        doc.close()
        return 1

    pages = [placements[i:i + CARDS_PER_PAGE]
             for i in range(0, len(placements), CARDS_PER_PAGE)]
    for pair in pages:
        page = doc.new_page(width=PAGE_W, height=PAGE_H)
        _draw_rows(page, sheet, pair[0].start_row, pair[-1].end_row)

    count = doc.page_count
    doc.save(output_path)
    doc.close()
    return count


def hex_to_rgb(value: str | None) -> tuple:
    """'#cccccc' -> (0.8, 0.8, 0.8); None or malformed -> black."""
    if not value:
        return BLACK
    text = value.lstrip('#')
    if len(text) != 6:
        return BLACK
    try:
        return tuple(int(text[i:i + 2], 16) / 255 for i in (0, 2, 4))
    except ValueError:
        return BLACK


# --- Layout helpers ---

def _page_scale(sheet: CardSheet, start_row: int, end_row: int) -> float:
    """Scale factor that fits rows [start_row, end_row) into the page."""
    units = sum(sheet.row_height(r) for r in range(start_row, end_row))
    if units <= 0:
        return 1.0
    return min(1.0, CONTENT_H / (units * STANDARD_ROW_HEIGHT))


def _scaled_font(size: int | None, scale: float) -> float:
    size = size or DEFAULT_FONT_SIZE
    return max(MIN_FONT_SIZE, min(size, size * scale * FONT_BOOST))


def _cell_rect(col: int, span: int, y0: float, y1: float) -> fitz.Rect:
    x0 = MARGIN + sum(COL_WIDTHS[:col - 1])
    x1 = x0 + sum(COL_WIDTHS[col - 1:col - 1 + span])
    return fitz.Rect(x0, y0, x1, y1)


# --- Drawing functions ---

def _draw_rows(page, sheet: CardSheet, start_row: int, end_row: int):
    """Draw sheet rows [start_row, end_row) from the top margin down."""
    scale = _page_scale(sheet, start_row, end_row)
    unit_h = STANDARD_ROW_HEIGHT * scale

    y = MARGIN
    for row in range(start_row, end_row):
        row_h = sheet.row_height(row) * unit_h
        for cell in sheet.row_cells(row):
            rect = _cell_rect(cell.col, cell.span, y, y + row_h)
            if cell.border:
                page.draw_rect(rect, color=BLACK, width=BORDER_WIDTH)
            if cell.value:
                _draw_cell_text(page, rect, cell, _scaled_font(cell.font_size, scale))
        y += row_h


def _draw_cell_text(page, rect, cell, font_size: float):
    """Draw a cell's value inside rect, honouring alignment and wrap."""
    fontname = FONT_BOLD if cell.bold else FONT_REGULAR
    color = hex_to_rgb(cell.color)

    if cell.wrap:
        _draw_wrapped(page, rect, cell.value, fontname, font_size, color)
        return

    text_w = fitz.get_text_length(cell.value, fontname=fontname, fontsize=font_size)
    if cell.halign == 'center':
        x = (rect.x0 + rect.x1) / 2 - text_w / 2
    elif cell.halign == 'right':
        x = rect.x1 - CELL_PAD - text_w
    else:
        x = rect.x0 + CELL_PAD

    # insert_text positions the baseline
    if cell.valign == 'top':
        y = rect.y0 + CELL_PAD + font_size * 0.8
    elif cell.valign == 'middle':
        y = (rect.y0 + rect.y1) / 2 + font_size * 0.35
    else:
        y = rect.y1 - CELL_PAD - font_size * 0.2

    page.insert_text(fitz.Point(x, y), cell.value,
                     fontname=fontname, fontsize=font_size, color=color)


def _draw_wrapped(page, rect, text: str, fontname: str, font_size: float, color):
    """Wrap text in rect, shrinking the font until it fits.

    Text that does not fit even at the minimum size is drawn on one line
    and allowed to overflow the cell.
    """
    box = fitz.Rect(rect.x0 + CELL_PAD, rect.y0, rect.x1 - CELL_PAD, rect.y1 + font_size)
    size = font_size
    while size >= MIN_FONT_SIZE:
        shape = page.new_shape()
        if shape.insert_textbox(box, text, fontname=fontname,
                                fontsize=size, color=color) >= 0:
            shape.commit()
            return
        size -= 0.5
    page.insert_text(fitz.Point(box.x0, rect.y1 - CELL_PAD), text,
                     fontname=fontname, fontsize=MIN_FONT_SIZE, color=color)
