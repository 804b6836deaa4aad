"""
Printing metadata enrichment for deck text.

Fills in set codes and collector numbers for card lines that lack them,
so that snapshots of a deck can be diffed printing by printing.

Priority per card line:
    1. Line already has set code + collector number -> kept as-is
    2. Previous snapshot has printings for the card -> carried forward
    3. Injected lookup has a printing for the card -> used
    4. Otherwise the line is kept unchanged

Headers, comments, blank lines and unrecognized lines pass through
verbatim, so the enriched text parses into the same sections.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from deckdelta.models.deck import CardEntry
from deckdelta.parsers.deck_text import parse, parse_card_line
from deckdelta.parsers.sections import LINE_BREAK, is_comment, is_header
from deckdelta.parsers.tabular import looks_tabular

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Printing:
    """A specific printing of a card."""

    set_code: str
    collector_number: str
    is_foil: bool = False
    quantity: int = 0


# Takes display names, returns printings keyed by name identity
PrintingLookup = Callable[[Sequence[str]], Mapping[str, Printing]]


def build_card_line(
    quantity: int,
    name: str,
    set_code: str = "",
    collector_number: str = "",
    is_foil: bool = False,
) -> str:
    """Serialize a card in the "qty name (set) [cn] *F*" shape the parser reads."""
    line = f"{quantity} {name}"
    if set_code:
        line += f" ({set_code})"
    if collector_number:
        line += f" [{collector_number}]"
    if is_foil:
        line += " *F*"
    return line


def build_metadata_lookup(previous_text: str | None) -> dict[str, list[Printing]]:
    """All known printings per card identity in a previous snapshot."""
    lookup: dict[str, list[Printing]] = {}
    if not previous_text:
        return lookup

    for entry in parse(previous_text).entries():
        if not entry.has_printing:
            continue
        lookup.setdefault(entry.identity, []).append(
            Printing(
                set_code=entry.set_code,
                collector_number=entry.collector_number,
                is_foil=entry.is_foil,
                quantity=entry.quantity,
            )
        )
    return lookup


def _carry_forward(entry: CardEntry, printings: list[Printing]) -> list[str]:
    """Apply previous printings to a card line's quantity."""
    if len(printings) == 1:
        printing = printings[0]
        return [
            build_card_line(
                entry.quantity,
                entry.display_name,
                printing.set_code,
                printing.collector_number,
                entry.is_foil or printing.is_foil,
            )
        ]

    # Reuse previous quantities in order; any remainder goes to the first printing
    lines: list[str] = []
    remaining = entry.quantity
    for printing in printings:
        if remaining <= 0:
            break
        line_qty = min(printing.quantity, remaining)
        lines.append(
            build_card_line(
                line_qty,
                entry.display_name,
                printing.set_code,
                printing.collector_number,
                printing.is_foil,
            )
        )
        remaining -= line_qty

    if remaining > 0:
        first = printings[0]
        lines.append(
            build_card_line(
                remaining,
                entry.display_name,
                first.set_code,
                first.collector_number,
                first.is_foil,
            )
        )
    return lines


def _needs_lookup(text: str, previous: Mapping[str, list[Printing]]) -> list[str]:
    names: list[str] = []
    seen: set[str] = set()
    for entry in parse(text).entries():
        if entry.has_printing or entry.identity in previous or entry.identity in seen:
            continue
        seen.add(entry.identity)
        names.append(entry.display_name)
    return names


def enrich_deck_text(
    new_text: str | None,
    previous_text: str | None = None,
    lookup: PrintingLookup | None = None,
) -> str | None:
    """
    Enrich deck text with printing metadata.

    Args:
        new_text: Deck text to enrich
        previous_text: Previous snapshot text used for carry-forward
        lookup: Optional source of default printings for unknown cards.
            Errors raised by the lookup propagate to the caller.

    Returns:
        Enriched deck text (the input unchanged if empty)
    """
    if not new_text or not new_text.strip():
        return new_text

    # Delimited exports carry no printing columns
    if looks_tabular(new_text):
        logger.debug("Skipping enrichment of tabular deck export")
        return new_text

    previous = build_metadata_lookup(previous_text)

    fallback: Mapping[str, Printing] = {}
    if lookup is not None:
        missing = _needs_lookup(new_text, previous)
        if missing:
            fallback = lookup(missing)

    result: list[str] = []
    enriched = 0

    for raw_line in LINE_BREAK.split(new_text):
        trimmed = raw_line.strip()
        if not trimmed or is_header(trimmed) or is_comment(trimmed):
            result.append(raw_line)
            continue

        parsed = parse_card_line(trimmed)
        if parsed is None or parsed.entry.has_printing:
            result.append(raw_line)
            continue

        entry = parsed.entry
        prefix = "SB: " if parsed.is_sideboard else ""
        suffix = " (Commander)" if parsed.is_commander else ""

        printings = previous.get(entry.identity)
        if printings:
            lines = _carry_forward(entry, printings)
        elif entry.identity in fallback:
            printing = fallback[entry.identity]
            lines = [
                build_card_line(
                    entry.quantity,
                    entry.display_name,
                    printing.set_code,
                    printing.collector_number,
                    entry.is_foil,
                )
            ]
        else:
            result.append(raw_line)
            continue

        enriched += 1
        result.extend(f"{prefix}{line}{suffix}" for line in lines)

    logger.debug("Enriched %d card lines with printing metadata", enriched)
    return "\n".join(result)
