"""
Parser for delimited (CSV / TSV) deck exports.

Expected columns (flexible ordering, case-insensitive):
    - Name / Card / Card Name / CardName     (required)
    - Quantity / Count / Qty / Amount        (optional, default 1)
    - Section / Board / Type / Location      (optional)

Rows whose section value contains "side" or equals "sb" go to the
sideboard. No printing metadata or commanders are read from this format.
"""

import csv
import logging
from io import StringIO

from deckdelta.models.deck import CardEntry, ParsedDeck, add_entry
from deckdelta.parsers.normalize import normalize_name

logger = logging.getLogger(__name__)

NAME_COLUMNS = ("name", "card", "card name", "cardname")
QUANTITY_COLUMNS = ("quantity", "count", "qty", "amount")
SECTION_COLUMNS = ("section", "board", "type", "location")

# Substrings that mark a first line as a header row
HEADER_TOKENS = ("quantity", "count", "name", "card")


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def detect_delimiter(text: str) -> str | None:
    """Return the delimiter of a tabular header line, or None."""
    first_line = _first_line(text)
    lower_first = first_line.lower()
    if not any(token in lower_first for token in HEADER_TOKENS):
        return None
    if "\t" in first_line:
        return "\t"
    if "," in first_line:
        return ","
    return None


def looks_tabular(text: str) -> bool:
    """True if text has a delimited header row followed by data."""
    lines = [line for line in text.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        return False
    return detect_delimiter(text) is not None


def _find_column(header: list[str], aliases: tuple[str, ...]) -> int | None:
    for index, column in enumerate(header):
        if column in aliases:
            return index
    return None


def _cell(row: list[str], index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return row[index].strip()


def _parse_quantity(value: str) -> int:
    try:
        return int(value) if value else 1
    except ValueError:
        return 1


def parse_tabular(text: str) -> ParsedDeck | None:
    """
    Parse a delimited deck export.

    Returns:
        ParsedDeck with bare-name entries, or None if no name column exists or the
        csv reader rejects the text (the caller then falls back to
        line-oriented parsing).
    """
    delimiter = detect_delimiter(text) or ","
    try:
        rows = [row for row in csv.reader(StringIO(text.strip()), delimiter=delimiter) if row]
    except csv.Error as e:
        logger.debug("Unreadable tabular deck export, parsing as lines: %s", e)
        return None
    if not rows:
        return None

    header = [column.strip().lower() for column in rows[0]]
    name_idx = _find_column(header, NAME_COLUMNS)
    qty_idx = _find_column(header, QUANTITY_COLUMNS)
    section_idx = _find_column(header, SECTION_COLUMNS)

    if name_idx is None:
        return None

    mainboard: dict[str, CardEntry] = {}
    sideboard: dict[str, CardEntry] = {}
    dropped = 0

    for row in rows[1:]:
        name = normalize_name(_cell(row, name_idx))
        if not name:
            dropped += 1
            continue

        quantity = _parse_quantity(_cell(row, qty_idx)) if qty_idx is not None else 1
        if quantity <= 0:
            dropped += 1
            continue

        section = _cell(row, section_idx).lower()
        target = sideboard if "side" in section or section == "sb" else mainboard
        add_entry(target, CardEntry(display_name=name, quantity=quantity))

    if dropped:
        logger.debug("Dropped %d unusable rows from tabular deck export", dropped)

    return ParsedDeck(mainboard=mainboard, sideboard=sideboard)
