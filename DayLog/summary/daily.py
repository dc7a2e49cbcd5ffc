from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from DayLog.config import Settings
from DayLog.formatters import EmptyNoteError, SummaryError, SummaryFormatter, get_formatter

log = logging.getLogger(__name__)


def summary_header(settings: Settings) -> str:
    if settings.add_header:
        return f"\n\n---\n{settings.summary_header}\n"
    return "\n\n"


def summarize_note(
    note_path: Path,
    settings: Settings,
    formatter: Optional[SummaryFormatter] = None,
    dry_run: bool = False,
) -> str:
    """
    Append a Time | Activity | Notes table to a Markdown note.

    The note is only rewritten once the formatter has returned; any failure
    (or `dry_run`) leaves the file untouched. Returns the table text.
    """
    note_path = Path(note_path)
    if not note_path.exists():
        log.error(f"Note not found: {note_path}")
        raise FileNotFoundError(f"Note not found: {note_path}")

    try:
        original = note_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        log.error(f"Could not decode {note_path} as UTF-8: {e}")
        raise SummaryError(f"Note is not valid UTF-8: {note_path}") from e
    if not original.strip():
        raise EmptyNoteError("Note is empty")

    formatter = formatter or get_formatter(settings)
    log.info(f"Summarizing {note_path} with the {formatter.name} formatter...")
    summary = formatter.format(original)

    if dry_run:
        log.info("Dry run: note left unchanged.")
        return summary

    note_path.write_text(f"{original}{summary_header(settings)}{summary}", encoding="utf-8")
    log.info(f"✅ Daily summary inserted into {note_path}")
    return summary
