"""
Deck valuation.

Prices a parsed deck from quotes supplied by the caller. Two quote maps
are accepted, both keyed by card name identity (lowercased front face):

    default_prices   cheapest known printing of each card
    printing_prices  the exact printing named in the deck list

The deck total uses the exact printing when the entry carries full
printing metadata; the budget total always uses the cheapest printing.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from deckdelta.models.deck import ParsedDeck, name_identity


@dataclass(frozen=True, slots=True)
class PriceQuote:
    """USD prices of a card; None when the source has no price."""

    usd: float | None = None
    usd_foil: float | None = None

    def __post_init__(self) -> None:
        for value in (self.usd, self.usd_foil):
            if value is not None and value < 0:
                raise ValueError(f"Price cannot be negative: {value}")

    @property
    def cheapest(self) -> float:
        """Lowest non-zero price, 0.0 if none."""
        prices = [p for p in (self.usd, self.usd_foil) if p]
        return min(prices) if prices else 0.0


@dataclass(frozen=True, slots=True)
class CardValue:
    name: str
    quantity: int
    price: float
    cheapest_price: float

    @property
    def total(self) -> float:
        return self.price * self.quantity

    @property
    def cheapest_total(self) -> float:
        return self.cheapest_price * self.quantity


@dataclass(frozen=True, slots=True)
class DeckValue:
    """Priced deck; cards sorted by line total, most expensive first."""

    total_price: float
    budget_price: float
    cards: tuple[CardValue, ...] = field(default_factory=tuple)


def _printing_price(quote: PriceQuote, is_foil: bool, fallback: float) -> float:
    if is_foil:
        if quote.usd_foil is not None:
            return quote.usd_foil
        if quote.usd is not None:
            return quote.usd
        return fallback
    return quote.usd if quote.usd is not None else fallback


def compute_deck_value(
    deck: ParsedDeck,
    default_prices: Mapping[str, PriceQuote],
    printing_prices: Mapping[str, PriceQuote] | None = None,
) -> DeckValue:
    """
    Price the mainboard and commanders of a deck.

    Each card identity is priced once (first mainboard entry wins).
    Cards without any price are left out of the card list but still
    counted as zero in the totals.
    """
    printing_prices = printing_prices or {}
    cards: list[CardValue] = []
    seen: set[str] = set()
    total = 0.0
    budget = 0.0

    for entry in deck.mainboard.values():
        identity = entry.identity
        if identity in seen:
            continue
        seen.add(identity)

        default = default_prices.get(identity, PriceQuote())
        cheapest = default.cheapest
        specific = printing_prices.get(identity)

        if specific is not None and entry.has_printing:
            price = _printing_price(specific, entry.is_foil, cheapest)
        else:
            price = cheapest

        value = CardValue(entry.display_name, entry.quantity, price, cheapest)
        total += value.total
        budget += value.cheapest_total
        if price > 0 or cheapest > 0:
            cards.append(value)

    for name in deck.commanders:
        identity = name_identity(name)
        if identity in seen:
            continue
        seen.add(identity)

        cheapest = default_prices.get(identity, PriceQuote()).cheapest
        total += cheapest
        budget += cheapest
        if cheapest > 0:
            cards.append(CardValue(name, 1, cheapest, cheapest))

    cards.sort(key=lambda c: c.total, reverse=True)

    return DeckValue(
        total_price=round(total, 2),
        budget_price=round(budget, 2),
        cards=tuple(cards),
    )
