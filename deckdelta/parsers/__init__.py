from deckdelta.parsers.archidekt import ArchidektDeck, archidekt_to_text
from deckdelta.parsers.deck_text import ParsedLine, parse, parse_card_line
from deckdelta.parsers.normalize import normalize_name
from deckdelta.parsers.sections import SectionState, split_sections
from deckdelta.parsers.tabular import looks_tabular, parse_tabular

__all__ = [
    "ArchidektDeck",
    "ParsedLine",
    "SectionState",
    "archidekt_to_text",
    "looks_tabular",
    "normalize_name",
    "parse",
    "parse_card_line",
    "parse_tabular",
    "split_sections",
]
