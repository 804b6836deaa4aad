from deckdelta.services.changelog import (
    format_changelog,
    format_json,
    format_mpcfill,
    format_reddit,
    render,
)
from deckdelta.services.differ import compute_diff, diff_section, resolve_group
from deckdelta.services.enrichment import Printing, build_card_line, enrich_deck_text
from deckdelta.services.pricing import CardValue, DeckValue, PriceQuote, compute_deck_value

__all__ = [
    "CardValue",
    "DeckValue",
    "PriceQuote",
    "Printing",
    "build_card_line",
    "compute_deck_value",
    "compute_diff",
    "diff_section",
    "enrich_deck_text",
    "format_changelog",
    "format_json",
    "format_mpcfill",
    "format_reddit",
    "render",
    "resolve_group",
]
