"""Parse the per-category climb assignment table."""

from .models import cell_text


def parse_climb_assignments(rows: list) -> dict[str, list[str]]:
    """Build {category: [climb ids]} from a (category, climb list) table.

    The first row is a header. Rows missing either cell are skipped, since
    that category simply has no climbs assigned yet. Climb lists are split
    on commas and trimmed; empty tokens ("101,,103") are kept as empty ids.
    A category listed twice keeps its last row.
    """
    assignments = {}
    for row in rows[1:]:
        if len(row) < 2:
            continue
        category = cell_text(row[0]).strip()
        climbs_str = cell_text(row[1])
        if not category or not climbs_str:
            continue

        assignments[category] = [c.strip() for c in climbs_str.split(',')]

    return assignments
