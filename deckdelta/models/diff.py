"""
Diff result model.

A DiffResult holds one DiffSection per deck section. Each section
classifies every change into exactly one of four sequences:
cards in, cards out, quantity changes, and printing changes.

The per-group resolver emits Resolution values; the differ sorts them
into the section sequences.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CardCount:
    """A card added to or removed from a section."""

    name: str
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity}


@dataclass(frozen=True, slots=True)
class QuantityChange:
    """Same card on both sides with a different copy count."""

    name: str
    old_qty: int
    new_qty: int

    @property
    def delta(self) -> int:
        return self.new_qty - self.old_qty

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "oldQty": self.old_qty,
            "newQty": self.new_qty,
            "delta": self.delta,
        }


@dataclass(frozen=True, slots=True)
class PrintingChange:
    """Same card, same copy count, different set/collector number."""

    name: str
    quantity: int
    old_set_code: str
    old_collector_number: str
    new_set_code: str
    new_collector_number: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "oldSetCode": self.old_set_code,
            "oldCollectorNumber": self.old_collector_number,
            "newSetCode": self.new_set_code,
            "newCollectorNumber": self.new_collector_number,
        }


@dataclass(frozen=True, slots=True)
class DiffSection:
    """Changes within one deck section, each sequence sorted by name."""

    cards_in: tuple[CardCount, ...] = ()
    cards_out: tuple[CardCount, ...] = ()
    quantity_changes: tuple[QuantityChange, ...] = ()
    printing_changes: tuple[PrintingChange, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.cards_in or self.cards_out or self.quantity_changes or self.printing_changes
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cardsIn": [c.to_dict() for c in self.cards_in],
            "cardsOut": [c.to_dict() for c in self.cards_out],
            "quantityChanges": [c.to_dict() for c in self.quantity_changes],
            "printingChanges": [c.to_dict() for c in self.printing_changes],
        }


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Complete diff between a "before" and an "after" deck."""

    mainboard: DiffSection
    sideboard: DiffSection
    has_sideboard: bool = False
    commanders: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.mainboard.is_empty and self.sideboard.is_empty

    def to_dict(self) -> dict[str, Any]:
        return {
            "commanders": list(self.commanders),
            "hasSideboard": self.has_sideboard,
            "mainboard": self.mainboard.to_dict(),
            "sideboard": self.sideboard.to_dict(),
        }


# =============================================================================
# GROUP RESOLUTIONS
# =============================================================================


@dataclass(frozen=True, slots=True)
class NoChange:
    name: str


@dataclass(frozen=True, slots=True)
class Added:
    name: str
    quantity: int


@dataclass(frozen=True, slots=True)
class Removed:
    name: str
    quantity: int


@dataclass(frozen=True, slots=True)
class QuantityChanged:
    name: str
    old_qty: int
    new_qty: int


@dataclass(frozen=True, slots=True)
class PrintingChanged:
    name: str
    quantity: int
    old_set_code: str
    old_collector_number: str
    new_set_code: str
    new_collector_number: str


Resolution = NoChange | Added | Removed | QuantityChanged | PrintingChanged
