from deckdelta.models.deck import (
    CardEntry,
    ParsedDeck,
    Section,
    add_entry,
    card_key,
    front_face,
    name_identity,
)
from deckdelta.models.diff import (
    Added,
    CardCount,
    DiffResult,
    DiffSection,
    NoChange,
    PrintingChange,
    PrintingChanged,
    QuantityChange,
    QuantityChanged,
    Removed,
    Resolution,
)

__all__ = [
    "Added",
    "CardCount",
    "CardEntry",
    "DiffResult",
    "DiffSection",
    "NoChange",
    "ParsedDeck",
    "PrintingChange",
    "PrintingChanged",
    "QuantityChange",
    "QuantityChanged",
    "Removed",
    "Resolution",
    "Section",
    "add_entry",
    "card_key",
    "front_face",
    "name_identity",
]
