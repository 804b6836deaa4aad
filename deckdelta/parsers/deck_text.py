"""
Deck list parser.

Turns free-form deck text into a ParsedDeck. Accepts:
    - Delimited exports with a header row (see tabular.py)
    - Plain lists: "4 Lightning Bolt", "4x Lightning Bolt", "Lightning Bolt"
    - Arena / MTGO / Moxfield style lines with set code, collector
      number and foil marker: "1 Sol Ring (c21) [263] *F*"
    - Section headers (Commander, Sideboard, Deck, ...), blank-line
      sideboards, "SB:" line prefixes and inline "(Commander)" tags

Malformed lines are dropped silently. parse() never raises.
"""

import logging
import re
from dataclasses import dataclass

from deckdelta.models.deck import CardEntry, ParsedDeck, add_entry
from deckdelta.parsers.line_matchers import LINE_MATCHERS, Matched
from deckdelta.parsers.normalize import normalize_name
from deckdelta.parsers.sections import is_comment, split_sections
from deckdelta.parsers.tabular import looks_tabular, parse_tabular

logger = logging.getLogger(__name__)

SB_PREFIX = re.compile(r"^\s*SB:\s*", re.IGNORECASE)

# Deckcheck-style exports tag the commander at the end of its line
INLINE_COMMANDER = re.compile(r"\s*\(Commander\)\s*$", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """A single recognized card line and its routing flags."""

    entry: CardEntry
    is_sideboard: bool = False
    is_commander: bool = False


def parse_card_line(line: str) -> ParsedLine | None:
    """
    Parse one card line.

    Returns:
        ParsedLine, or None for comments, zero quantities and lines no
        matcher recognizes.
    """
    if is_comment(line):
        return None

    is_sideboard = False
    prefix = SB_PREFIX.match(line)
    if prefix:
        line = line[prefix.end() :].strip()
        is_sideboard = True

    is_commander = False
    if INLINE_COMMANDER.search(line):
        line = INLINE_COMMANDER.sub("", line).strip()
        is_commander = True

    for matcher in LINE_MATCHERS:
        outcome = matcher(line)
        if not isinstance(outcome, Matched):
            continue

        name = normalize_name(outcome.name)
        if not name:
            continue
        if outcome.quantity <= 0:
            return None

        entry = CardEntry(
            display_name=name,
            quantity=outcome.quantity,
            set_code=outcome.set_code,
            collector_number=outcome.collector_number,
            is_foil=outcome.is_foil,
        )
        return ParsedLine(entry=entry, is_sideboard=is_sideboard, is_commander=is_commander)

    return None


def _dedupe_names(names: list[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        if name.lower() in seen:
            continue
        seen.add(name.lower())
        result.append(name)
    return tuple(result)


def parse(raw_text: str | None) -> ParsedDeck:
    """
    Parse deck text into a ParsedDeck.

    Args:
        raw_text: Raw deck text (clipboard paste, file contents, export)

    Returns:
        ParsedDeck. Empty if input is None, empty or whitespace.
    """
    if not raw_text or not raw_text.strip():
        return ParsedDeck()

    if looks_tabular(raw_text):
        tabular = parse_tabular(raw_text)
        if tabular is not None:
            return tabular

    split = split_sections(raw_text)

    mainboard: dict[str, CardEntry] = {}
    sideboard: dict[str, CardEntry] = {}
    commander_zone: dict[str, CardEntry] = {}
    inline_commanders: list[str] = []
    dropped = 0

    for line in split.main_lines:
        parsed = parse_card_line(line)
        if parsed is None:
            dropped += 1
            continue
        if parsed.is_sideboard:
            add_entry(sideboard, parsed.entry)
            continue
        add_entry(mainboard, parsed.entry)
        if parsed.is_commander:
            inline_commanders.append(parsed.entry.display_name)

    for line in split.side_lines:
        parsed = parse_card_line(line)
        if parsed is None:
            dropped += 1
            continue
        add_entry(sideboard, parsed.entry)

    for line in split.commander_lines:
        parsed = parse_card_line(line)
        if parsed is None:
            dropped += 1
            continue
        add_entry(sideboard if parsed.is_sideboard else commander_zone, parsed.entry)

    # Commanders are part of the 100: they live in the mainboard as well
    for entry in commander_zone.values():
        add_entry(mainboard, entry)

    if commander_zone:
        commanders = _dedupe_names([entry.display_name for entry in commander_zone.values()])
    else:
        commanders = _dedupe_names(inline_commanders)

    if dropped:
        logger.debug("Dropped %d unrecognized lines from deck text", dropped)

    return ParsedDeck(mainboard=mainboard, sideboard=sideboard, commanders=commanders)
