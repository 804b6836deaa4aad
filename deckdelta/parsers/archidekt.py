"""
Converter for Archidekt deck JSON.

Archidekt returns each card with a list of categories. Categories decide
the section the card lands in:
    commander / commanders   -> Commander block
    sideboard                -> Sideboard block
    maybeboard / considering -> skipped
    anything else            -> mainboard

The output is plain deck text that parse() reads back.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

COMMANDER_CATEGORIES = frozenset({"commander", "commanders"})
SIDEBOARD_CATEGORIES = frozenset({"sideboard"})
SKIPPED_CATEGORIES = frozenset({"maybeboard", "considering"})


@dataclass(frozen=True, slots=True)
class ArchidektDeck:
    """Deck text rebuilt from an Archidekt payload."""

    text: str
    commanders: tuple[str, ...] = ()


def _card_name(entry: Mapping[str, Any]) -> str:
    card = entry.get("card") or {}
    oracle = card.get("oracleCard") or {}
    return oracle.get("name") or card.get("name") or "Unknown"


def _categories(entry: Mapping[str, Any]) -> set[str]:
    names: set[str] = set()
    for category in entry.get("categories") or []:
        if isinstance(category, str):
            names.add(category.lower())
        elif isinstance(category, Mapping):
            names.add(str(category.get("name") or "").lower())
    return names


def archidekt_to_text(data: Mapping[str, Any]) -> ArchidektDeck:
    """
    Rebuild deck text from an Archidekt deck payload.

    Args:
        data: Decoded JSON of an Archidekt deck (must contain "cards")

    Returns:
        ArchidektDeck with the deck text and commander names
    """
    main_lines: list[str] = []
    side_lines: list[str] = []
    commander_lines: list[str] = []
    commanders: list[str] = []

    for entry in data.get("cards") or []:
        name = _card_name(entry)
        quantity = entry.get("quantity") or 1
        categories = _categories(entry)
        line = f"{quantity} {name}"

        if categories & COMMANDER_CATEGORIES:
            commander_lines.append(line)
            commanders.append(name)
        elif categories & SIDEBOARD_CATEGORIES:
            side_lines.append(line)
        elif categories & SKIPPED_CATEGORIES:
            continue
        else:
            main_lines.append(line)

    text = ""
    if commander_lines:
        text += "Commander\n" + "\n".join(commander_lines) + "\n\n"
    text += "\n".join(main_lines)
    if side_lines:
        text += "\n\nSideboard\n" + "\n".join(side_lines)

    return ArchidektDeck(text=text, commanders=tuple(commanders))
