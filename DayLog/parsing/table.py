from typing import Iterable

from DayLog.models import NOTES_EMPTY, Row

HEADER = ["Time", "Activity", "Notes"]
SEPARATOR = "|---|---|---|"


def _table_row(cells: Iterable[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def render_table(rows: Iterable[Row]) -> str:
    """Render rows as a Markdown table. Empty notes show as '-', not '—'."""
    lines = [_table_row(HEADER), SEPARATOR]
    for row in rows:
        lines.append(_table_row([row.time, row.activity, row.notes or NOTES_EMPTY]))
    return "\n".join(lines)
