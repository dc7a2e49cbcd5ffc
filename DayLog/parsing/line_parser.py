"""
Heuristic parser turning a freeform day log into table rows.

Each non-blank line becomes exactly one Row. Rules are applied with a fixed
precedence, later stages only running when earlier ones did not match:

    1. bracketed duration  "[2hrs]"          -> notes
    2. range               "9 to 5", "till"  -> "START–END"
    3. single time         "at 7:30"         -> "7:30 AM"
    4. no time                               -> "—"

The parser never raises; unrecognized input degrades to absence markers.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from DayLog.models import ABSENT, RANGE_SEP, Row
from DayLog.parsing.table import render_table
from DayLog.parsing.time_tokens import find_time, token_from_match

log = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r"\r?\n")
BRACKET_RE = re.compile(r"\[(.*?)\]")
RANGE_WORD_RE = re.compile(r"\b(?:till|to)\b", re.ASCII | re.IGNORECASE)
FILLER_WORD_RE = re.compile(r"\b(?:at|around|by)\b", re.ASCII | re.IGNORECASE)

# Activity cleanup, applied in this order.
CLEANUP_RULES: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"^-+\s*"), ""),      # list marker
    (re.compile(r"\s{2,}"), " "),     # whitespace runs
    (re.compile(r"!+"), ""),          # exclamations
    (re.compile(r"\s*-\s*$"), ""),    # trailing dash
]


def split_lines(text: str) -> List[str]:
    """Split on \\n or \\r\\n, trim each line and drop blank ones."""
    return [line.strip() for line in LINE_BREAK_RE.split(text) if line.strip()]


def _remove_span(text: str, match: re.Match) -> str:
    return text[:match.start()] + text[match.end():]


def _extract_notes(line: str) -> Tuple[str, str]:
    """Return (working_text, notes) with the first [...] fragment lifted out."""
    match = BRACKET_RE.search(line)
    if not match:
        return line, ""
    return _remove_span(line, match).strip(), match.group(1).strip()


def _match_range(text: str) -> Optional[Tuple[str, str]]:
    """Return (time, activity) when `text` is "<start> till|to <end>"."""
    parts = RANGE_WORD_RE.split(text)
    if len(parts) != 2:
        return None
    start, end = find_time(parts[0]), find_time(parts[1])
    if not (start and end):
        return None
    time = f"{token_from_match(start)}{RANGE_SEP}{token_from_match(end)}"
    return time, _remove_span(parts[0], start).strip()


def _match_single(text: str) -> Optional[Tuple[str, str]]:
    match = find_time(text)
    if not match:
        return None
    activity = FILLER_WORD_RE.sub("", _remove_span(text, match), count=1)
    return str(token_from_match(match)), activity.strip()


def clean_activity(text: str) -> str:
    for pattern, replacement in CLEANUP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip() or ABSENT


def parse_line(line: str) -> Row:
    working, notes = _extract_notes(line.strip())
    found = _match_range(working) or _match_single(working)
    time, activity = found if found else (ABSENT, working)
    return Row(time=time, activity=clean_activity(activity), notes=notes)


def parse_log(text: str) -> List[Row]:
    rows = [parse_line(line) for line in split_lines(text)]
    log.debug(f"Parsed {len(rows)} rows from {len(text)} chars of log text.")
    return rows


def format_log(text: str) -> str:
    """Convert a freeform day log into a Time | Activity | Notes table."""
    return render_table(parse_log(text))
