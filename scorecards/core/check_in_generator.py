"""Check-in list PDF generator.

One page per session (more if a session overflows), each with:
- Session title
- Bordered table: Name, Category, Session, Bib #, Checked In
- Shaded header row, repeated on continuation pages
- Empty "Checked In" column for marking at the desk
"""

import fitz  # PyMuPDF

# Page layout (letter: 612 x 792 pt)
PAGE_W = 612
PAGE_H = 792
LEFT_MARGIN = 36
RIGHT_MARGIN = PAGE_W - 36
CONTENT_W = RIGHT_MARGIN - LEFT_MARGIN

TITLE_Y = 50
TABLE_TOP = 72
BOTTOM_Y = PAGE_H - 40
ROW_H = 22

# Relative widths: Name, Category, Session, Bib #, Checked In
COL_WEIGHTS = [200, 100, 100, 80, 120]
COL_WIDTHS = [CONTENT_W * w / sum(COL_WEIGHTS) for w in COL_WEIGHTS]

FONT_REGULAR = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'
TITLE_SIZE = 16
TEXT_SIZE = 10

BLACK = (0, 0, 0)
HEADER_FILL = (0.85, 0.85, 0.85)   # #d9d9d9

ROWS_PER_PAGE = int((BOTTOM_Y - TABLE_TOP) // ROW_H) - 1


def generate_check_in_pdf(rosters: list, output_path: str):
    """Generate the check-in list PDF, sessions in roster order.

    Args:
        rosters: CheckInRoster list from build_rosters().
        output_path: Where to save the PDF.

    Returns:
        Number of pages written.
    """
    doc = fitz.open()
    if not rosters:
        doc.new_page(width=PAGE_W, height=PAGE_H)
        doc.save(output_path)
        doc.close()
        return 1

    for roster in rosters:
        chunks = [roster.rows[i:i + ROWS_PER_PAGE]
                  for i in range(0, len(roster.rows), ROWS_PER_PAGE)] or [[]]
        for ci, chunk in enumerate(chunks):
            page = doc.new_page(width=PAGE_W, height=PAGE_H)
            title = roster.title if ci == 0 else f'{roster.title} (cont.)'
            _draw_title(page, title)
            _draw_table(page, roster.header, chunk)

    count = doc.page_count
    doc.save(output_path)
    doc.close()
    return count


def _draw_title(page, title: str):
    tw = fitz.get_text_length(title, fontname=FONT_BOLD, fontsize=TITLE_SIZE)
    page.insert_text(fitz.Point(PAGE_W / 2 - tw / 2, TITLE_Y), title,
                     fontname=FONT_BOLD, fontsize=TITLE_SIZE, color=BLACK)


def _draw_table(page, header: list, rows: list):
    """Draw the header and rows as a bordered grid."""
    y = TABLE_TOP
    _draw_row(page, y, header, bold=True, fill=HEADER_FILL)
    y += ROW_H
    for row in rows:
        _draw_row(page, y, row)
        y += ROW_H


def _draw_row(page, y: float, values: list, bold: bool = False, fill=None):
    fontname = FONT_BOLD if bold else FONT_REGULAR
    x = LEFT_MARGIN
    for width, value in zip(COL_WIDTHS, values):
        rect = fitz.Rect(x, y, x + width, y + ROW_H)
        page.draw_rect(rect, color=BLACK, fill=fill, width=0.5)
        text = _fit_text(str(value), fontname, width - 8)
        if text:
            page.insert_text(fitz.Point(x + 4, y + ROW_H / 2 + TEXT_SIZE * 0.35), text,
                             fontname=fontname, fontsize=TEXT_SIZE, color=BLACK)
        x += width


def _fit_text(text: str, fontname: str, max_width: float) -> str:
    """Trim text with an ellipsis until it fits max_width."""
    if fitz.get_text_length(text, fontname=fontname, fontsize=TEXT_SIZE) <= max_width:
        return text
    while text and fitz.get_text_length(text + '...', fontname=fontname,
                                        fontsize=TEXT_SIZE) > max_width:
        text = text[:-1]
    return text + '...' if text else ''
