"""
Parsed deck model.

A deck is split into a mainboard and a sideboard, each a mapping of
CardKey -> CardEntry, plus the ordered list of commander names.

CardKey format:
    "<front face, lowercased>"                      (bare identity)
    "<front face, lowercased>|<collector number>"   (printed identity)
"""

from dataclasses import dataclass, field, replace
from typing import Literal

DFC_SEPARATOR = " // "

Section = Literal["mainboard", "sideboard"]


def front_face(name: str) -> str:
    """Strip the back face from a double-faced card name."""
    index = name.find(DFC_SEPARATOR)
    if index == -1:
        return name
    return name[:index]


def name_identity(name: str) -> str:
    """Case-folded front face, used for all name comparisons."""
    return front_face(name).lower()


def card_key(name: str, collector_number: str = "") -> str:
    """Build the key a card is stored under in a deck section."""
    identity = name_identity(name)
    if collector_number:
        return f"{identity}|{collector_number}"
    return identity


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    One line-item of a decklist.

    Attributes:
        display_name: Normalized name in its original casing
        quantity: Number of copies (always positive)
        set_code: Set code as written (e.g., "m10"), empty if unknown
        collector_number: Collector number (e.g., "227", "136p", "DDO-20"),
            empty if unknown
        is_foil: True if the line carried a foil marker
    """

    display_name: str
    quantity: int
    set_code: str = ""
    collector_number: str = ""
    is_foil: bool = False

    @property
    def front_face(self) -> str:
        return front_face(self.display_name)

    @property
    def identity(self) -> str:
        return name_identity(self.display_name)

    @property
    def key(self) -> str:
        return card_key(self.display_name, self.collector_number)

    @property
    def is_bare(self) -> bool:
        """True if the entry is identified by name only."""
        return not self.collector_number

    @property
    def has_printing(self) -> bool:
        """True if both set code and collector number are known."""
        return bool(self.set_code and self.collector_number)

    def with_quantity(self, quantity: int) -> "CardEntry":
        return replace(self, quantity=quantity)


def add_entry(section: dict[str, CardEntry], entry: CardEntry) -> None:
    """Insert an entry, summing quantity when its key is already present."""
    existing = section.get(entry.key)
    if existing is None:
        section[entry.key] = entry
    else:
        section[entry.key] = existing.with_quantity(existing.quantity + entry.quantity)


@dataclass(frozen=True, slots=True)
class ParsedDeck:
    """
    Canonical structured form of a decklist.

    Commander names are references into the mainboard: every commander
    also has a mainboard entry.
    """

    mainboard: dict[str, CardEntry] = field(default_factory=dict)
    sideboard: dict[str, CardEntry] = field(default_factory=dict)
    commanders: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.mainboard and not self.sideboard and not self.commanders

    @property
    def has_sideboard(self) -> bool:
        return bool(self.sideboard)

    def section(self, name: Section) -> dict[str, CardEntry]:
        return self.mainboard if name == "mainboard" else self.sideboard

    def total_cards(self, section: Section = "mainboard") -> int:
        """Total copies in a section."""
        return sum(entry.quantity for entry in self.section(section).values())

    def entries(self) -> list[CardEntry]:
        """All entries, mainboard first."""
        return [*self.mainboard.values(), *self.sideboard.values()]
