"""
Deck diff / reconciliation engine.

Compares a "before" and an "after" ParsedDeck section by section. Within
a section, entries are grouped by front-face name and each group is
resolved independently:

1. Entries with the same full CardKey on both sides are paired. Equal
   quantities cancel; different quantities are a quantity change for
   that printing.
2. If any leftover entry is bare (name-only), each side's leftovers are
   pooled into a single total. This is how "9 Nazgul" matches nine
   individually printed Nazgul lines.
3. If every leftover entry is printed, printings are never netted
   against each other. A single leftover per side with equal quantity is
   a printing swap; anything else is independent cards in / cards out.

compute_diff() is a pure function: same inputs, same output, in the same
order.
"""

from collections.abc import Iterable, Sequence

from deckdelta.models.deck import CardEntry, ParsedDeck
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

EMPTY_DECK = ParsedDeck()


def _pooled_name(before: Sequence[CardEntry], after: Sequence[CardEntry]) -> str:
    if after:
        return after[0].display_name
    return before[0].display_name


def resolve_group(
    before_entries: Sequence[CardEntry],
    after_entries: Sequence[CardEntry],
) -> list[Resolution]:
    """
    Resolve one reconciliation group.

    Args:
        before_entries: Entries from the "before" section sharing one front face
        after_entries: Entries from the "after" section sharing the same front face

    Returns:
        Resolutions in a stable order: exact matches first (in "before"
        order), then the leftovers.
    """
    resolutions: list[Resolution] = []
    after_by_key = {entry.key: entry for entry in after_entries}
    matched_keys: set[str] = set()
    unmatched_before: list[CardEntry] = []

    for before in before_entries:
        after = after_by_key.get(before.key)
        if after is None:
            unmatched_before.append(before)
            continue

        matched_keys.add(before.key)
        if before.quantity == after.quantity:
            resolutions.append(NoChange(name=after.display_name))
        else:
            resolutions.append(
                QuantityChanged(
                    name=after.display_name,
                    old_qty=before.quantity,
                    new_qty=after.quantity,
                )
            )

    unmatched_after = [entry for entry in after_entries if entry.key not in matched_keys]

    if not unmatched_before and not unmatched_after:
        return resolutions

    if any(entry.is_bare for entry in (*unmatched_before, *unmatched_after)):
        resolutions.append(_resolve_pooled(unmatched_before, unmatched_after))
    else:
        resolutions.extend(_resolve_printed(unmatched_before, unmatched_after))

    return resolutions


def _resolve_pooled(before: Sequence[CardEntry], after: Sequence[CardEntry]) -> Resolution:
    """Asymmetric completeness: compare total copies per side."""
    name = _pooled_name(before, after)
    before_total = sum(entry.quantity for entry in before)
    after_total = sum(entry.quantity for entry in after)

    if before_total == after_total:
        return NoChange(name=name)
    if before_total == 0:
        return Added(name=name, quantity=after_total)
    if after_total == 0:
        return Removed(name=name, quantity=before_total)
    return QuantityChanged(name=name, old_qty=before_total, new_qty=after_total)


def _resolve_printed(before: Sequence[CardEntry], after: Sequence[CardEntry]) -> list[Resolution]:
    """Full completeness: distinct printings stay distinct."""
    if len(before) == 1 and len(after) == 1 and before[0].quantity == after[0].quantity:
        old, new = before[0], after[0]
        return [
            PrintingChanged(
                name=new.display_name,
                quantity=new.quantity,
                old_set_code=old.set_code,
                old_collector_number=old.collector_number,
                new_set_code=new.set_code,
                new_collector_number=new.collector_number,
            )
        ]

    resolutions: list[Resolution] = [
        Removed(name=entry.display_name, quantity=entry.quantity) for entry in before
    ]
    resolutions.extend(Added(name=entry.display_name, quantity=entry.quantity) for entry in after)
    return resolutions


def _group_entries(
    before: Iterable[CardEntry],
    after: Iterable[CardEntry],
) -> dict[str, tuple[list[CardEntry], list[CardEntry]]]:
    groups: dict[str, tuple[list[CardEntry], list[CardEntry]]] = {}
    for entry in before:
        groups.setdefault(entry.identity, ([], []))[0].append(entry)
    for entry in after:
        groups.setdefault(entry.identity, ([], []))[1].append(entry)
    return groups


def _by_name(name: str) -> tuple[str, str]:
    return (name.lower(), name)


def diff_section(
    before: dict[str, CardEntry],
    after: dict[str, CardEntry],
) -> DiffSection:
    """Diff one section of two decks."""
    cards_in: list[CardCount] = []
    cards_out: list[CardCount] = []
    quantity_changes: list[QuantityChange] = []
    printing_changes: list[PrintingChange] = []

    groups = _group_entries(before.values(), after.values())

    for identity in sorted(groups):
        before_entries, after_entries = groups[identity]
        for resolution in resolve_group(before_entries, after_entries):
            match resolution:
                case Added(name=name, quantity=quantity):
                    cards_in.append(CardCount(name=name, quantity=quantity))
                case Removed(name=name, quantity=quantity):
                    cards_out.append(CardCount(name=name, quantity=quantity))
                case QuantityChanged(name=name, old_qty=old_qty, new_qty=new_qty):
                    quantity_changes.append(
                        QuantityChange(name=name, old_qty=old_qty, new_qty=new_qty)
                    )
                case PrintingChanged():
                    printing_changes.append(
                        PrintingChange(
                            name=resolution.name,
                            quantity=resolution.quantity,
                            old_set_code=resolution.old_set_code,
                            old_collector_number=resolution.old_collector_number,
                            new_set_code=resolution.new_set_code,
                            new_collector_number=resolution.new_collector_number,
                        )
                    )
                case NoChange():
                    pass

    # sorted() is stable, so equal names keep their group order
    return DiffSection(
        cards_in=tuple(sorted(cards_in, key=lambda c: _by_name(c.name))),
        cards_out=tuple(sorted(cards_out, key=lambda c: _by_name(c.name))),
        quantity_changes=tuple(sorted(quantity_changes, key=lambda c: _by_name(c.name))),
        printing_changes=tuple(sorted(printing_changes, key=lambda c: _by_name(c.name))),
    )


def compute_diff(before: ParsedDeck | None, after: ParsedDeck | None) -> DiffResult:
    """
    Compute the diff between two parsed decks.

    Args:
        before: Earlier version of the deck (None is treated as empty)
        after: Later version of the deck (None is treated as empty)

    Returns:
        DiffResult with independent mainboard and sideboard sections.
        Commanders are taken from the "after" deck.
    """
    before = before or EMPTY_DECK
    after = after or EMPTY_DECK

    return DiffResult(
        mainboard=diff_section(before.mainboard, after.mainboard),
        sideboard=diff_section(before.sideboard, after.sideboard),
        has_sideboard=before.has_sideboard or after.has_sideboard,
        commanders=tuple(after.commanders),
    )
