import pytest

from deckdelta.models.deck import CardEntry, ParsedDeck
from deckdelta.models.diff import (
    Added,
    CardCount,
    DiffResult,
    NoChange,
    PrintingChange,
    PrintingChanged,
    QuantityChange,
    QuantityChanged,
    Removed,
)
from deckdelta.parsers import parse
from deckdelta.services.differ import compute_diff, resolve_group

NAZGUL_NUMBERS = ("100", "101", "102", "103", "104", "105", "106", "107", "108")


def make_deck(
    main: dict[str, int] | None = None,
    side: dict[str, int] | None = None,
    commanders: tuple[str, ...] = (),
) -> ParsedDeck:
    def build(entries: dict[str, int] | None) -> dict[str, CardEntry]:
        return {
            name.lower(): CardEntry(display_name=name, quantity=qty)
            for name, qty in (entries or {}).items()
        }

    return ParsedDeck(mainboard=build(main), sideboard=build(side), commanders=commanders)


def assert_no_changes(diff: DiffResult) -> None:
    for section in (diff.mainboard, diff.sideboard):
        assert section.cards_in == ()
        assert section.cards_out == ()
        assert section.quantity_changes == ()
        assert section.printing_changes == ()


def bare(name: str, quantity: int) -> CardEntry:
    return CardEntry(display_name=name, quantity=quantity)


def printed(name: str, quantity: int, set_code: str, number: str) -> CardEntry:
    return CardEntry(
        display_name=name, quantity=quantity, set_code=set_code, collector_number=number
    )


class TestResolveGroup:
    def test_exact_match_same_quantity(self) -> None:
        result = resolve_group([bare("Lightning Bolt", 4)], [bare("Lightning Bolt", 4)])
        assert result == [NoChange(name="Lightning Bolt")]

    def test_exact_match_scoped_to_printing(self) -> None:
        result = resolve_group(
            [printed("Nazgul", 2, "ltr", "100"), printed("Nazgul", 1, "ltr", "551")],
            [printed("Nazgul", 3, "ltr", "100"), printed("Nazgul", 1, "ltr", "551")],
        )
        assert result == [
            QuantityChanged(name="Nazgul", old_qty=2, new_qty=3),
            NoChange(name="Nazgul"),
        ]

    def test_pooled_equal_totals(self) -> None:
        after = [printed("Nazgul", 1, "ltr", n) for n in NAZGUL_NUMBERS]
        assert resolve_group([bare("Nazgul", 9)], after) == [NoChange(name="Nazgul")]

    def test_pooled_unequal_totals(self) -> None:
        after = [printed("Nazgul", 1, "ltr", n) for n in NAZGUL_NUMBERS]
        assert resolve_group([bare("Nazgul", 7)], after) == [
            QuantityChanged(name="Nazgul", old_qty=7, new_qty=9)
        ]

    def test_pooled_added(self) -> None:
        assert resolve_group([], [bare("Negate", 2)]) == [Added(name="Negate", quantity=2)]

    def test_pooled_removed(self) -> None:
        assert resolve_group([bare("Negate", 2)], []) == [Removed(name="Negate", quantity=2)]

    def test_bare_on_after_side_pools_printed_before(self) -> None:
        before = [printed("Forest", 5, "neo", "290"), printed("Forest", 5, "dmu", "277")]
        assert resolve_group(before, [bare("Forest", 10)]) == [NoChange(name="Forest")]

    def test_printing_swap(self) -> None:
        result = resolve_group(
            [printed("Terror of the Peaks", 1, "otj", "149")],
            [printed("Terror of the Peaks", 1, "m21", "164")],
        )
        assert result == [
            PrintingChanged(
                name="Terror of the Peaks",
                quantity=1,
                old_set_code="otj",
                old_collector_number="149",
                new_set_code="m21",
                new_collector_number="164",
            )
        ]

    def test_distinct_printings_with_unequal_quantity_not_netted(self) -> None:
        result = resolve_group(
            [printed("Lightning Bolt", 2, "m10", "227")],
            [printed("Lightning Bolt", 1, "m11", "149")],
        )
        assert result == [
            Removed(name="Lightning Bolt", quantity=2),
            Added(name="Lightning Bolt", quantity=1),
        ]

    def test_multiple_printed_residues_stay_independent(self) -> None:
        result = resolve_group(
            [printed("Nazgul", 1, "ltr", "100"), printed("Nazgul", 1, "ltr", "101")],
            [printed("Nazgul", 1, "ltr", "200"), printed("Nazgul", 1, "ltr", "201")],
        )
        assert [type(r) for r in result] == [Removed, Removed, Added, Added]

    def test_removed_printing_without_replacement(self) -> None:
        result = resolve_group([printed("Sol Ring", 1, "c21", "263")], [])
        assert result == [Removed(name="Sol Ring", quantity=1)]


class TestComputeDiffBasics:
    def test_identical_decks(self) -> None:
        deck = parse("4 Lightning Bolt\n2 Counterspell")
        assert_no_changes(compute_diff(deck, parse("4 Lightning Bolt\n2 Counterspell")))

    def test_empty_decks(self) -> None:
        diff = compute_diff(parse(""), parse(""))
        assert_no_changes(diff)
        assert diff.has_sideboard is False
        assert diff.commanders == ()

    def test_none_is_empty(self) -> None:
        diff = compute_diff(None, parse("4 Lightning Bolt"))
        assert diff.mainboard.cards_in == (CardCount(name="Lightning Bolt", quantity=4),)

    def test_cards_in(self) -> None:
        diff = compute_diff(parse("4 Lightning Bolt"), parse("4 Lightning Bolt\n2 Counterspell"))

        assert diff.mainboard.cards_in == (CardCount(name="Counterspell", quantity=2),)
        assert diff.mainboard.cards_out == ()

    def test_cards_out(self) -> None:
        diff = compute_diff(parse("4 Lightning Bolt\n2 Counterspell"), parse("4 Lightning Bolt"))

        assert diff.mainboard.cards_out == (CardCount(name="Counterspell", quantity=2),)
        assert diff.mainboard.cards_in == ()

    def test_quantity_increase(self) -> None:
        diff = compute_diff(parse("2 Lightning Bolt"), parse("4 Lightning Bolt"))
        change = diff.mainboard.quantity_changes[0]

        assert change == QuantityChange(name="Lightning Bolt", old_qty=2, new_qty=4)
        assert change.delta == 2

    def test_quantity_decrease(self) -> None:
        diff = compute_diff(parse("4 Lightning Bolt"), parse("2 Lightning Bolt"))
        assert diff.mainboard.quantity_changes[0].delta == -2

    def test_mixed_changes(self) -> None:
        before = parse("4 Lightning Bolt\n2 Counterspell\n3 Sol Ring\n1 Swords to Plowshares")
        after = parse("4 Lightning Bolt\n3 Counterspell\n1 Fatal Push\n1 Swords to Plowshares")
        diff = compute_diff(before, after)

        assert diff.mainboard.cards_out == (CardCount(name="Sol Ring", quantity=3),)
        assert diff.mainboard.cards_in == (CardCount(name="Fatal Push", quantity=1),)
        assert diff.mainboard.quantity_changes == (
            QuantityChange(name="Counterspell", old_qty=2, new_qty=3),
        )


class TestComputeDiffProperties:
    def test_no_op_diff(self, commander_deck_text: str) -> None:
        deck = parse(commander_deck_text)
        assert_no_changes(compute_diff(deck, deck))

    def test_case_insensitive(self) -> None:
        assert_no_changes(compute_diff(parse("4 lightning bolt"), parse("4 Lightning Bolt")))

    def test_bare_matches_printed(self) -> None:
        diff = compute_diff(parse("1 Lightning Bolt"), parse("1 Lightning Bolt (m10) [227]"))
        assert_no_changes(diff)

    def test_multi_printing_collapse(self) -> None:
        after = "\n".join(f"1 Nazgul (ltr) [{n}]" for n in NAZGUL_NUMBERS)
        assert_no_changes(compute_diff(parse("9 Nazgul"), parse(after)))

    def test_multi_printing_quantity_change(self) -> None:
        after = "\n".join(f"1 Nazgul (ltr) [{n}]" for n in NAZGUL_NUMBERS)
        diff = compute_diff(parse("7 Nazgul"), parse(after))

        assert diff.mainboard.quantity_changes == (
            QuantityChange(name="Nazgul", old_qty=7, new_qty=9),
        )
        assert diff.mainboard.quantity_changes[0].delta == 2
        assert diff.mainboard.cards_in == ()
        assert diff.mainboard.cards_out == ()

    def test_printing_swap(self) -> None:
        diff = compute_diff(
            parse("1 Terror of the Peaks (otj) [149]"),
            parse("1 Terror of the Peaks (m21) [164]"),
        )

        assert diff.mainboard.printing_changes == (
            PrintingChange(
                name="Terror of the Peaks",
                quantity=1,
                old_set_code="otj",
                old_collector_number="149",
                new_set_code="m21",
                new_collector_number="164",
            ),
        )
        assert diff.mainboard.cards_in == ()
        assert diff.mainboard.cards_out == ()

    def test_distinct_full_printings_not_netted(self) -> None:
        diff = compute_diff(
            parse("2 Lightning Bolt (m10) [227]"),
            parse("1 Lightning Bolt (m11) [149]"),
        )

        assert diff.mainboard.printing_changes == ()
        assert diff.mainboard.quantity_changes == ()
        assert diff.mainboard.cards_out == (CardCount(name="Lightning Bolt", quantity=2),)
        assert diff.mainboard.cards_in == (CardCount(name="Lightning Bolt", quantity=1),)

    def test_double_faced_front_face(self) -> None:
        diff = compute_diff(parse("1 Sheoldred // The True Scriptures"), parse("1 Sheoldred"))
        assert_no_changes(diff)

    def test_section_independence(self) -> None:
        before = parse("4 Lightning Bolt\n\nSideboard\n3 Fatal Push")
        after = parse("4 Lightning Bolt\n\nSideboard\n2 Fatal Push\n1 Negate")
        diff = compute_diff(before, after)

        assert diff.mainboard.is_empty
        assert diff.sideboard.cards_in == (CardCount(name="Negate", quantity=1),)
        assert diff.sideboard.quantity_changes == (
            QuantityChange(name="Fatal Push", old_qty=3, new_qty=2),
        )

    def test_card_moved_between_sections(self) -> None:
        diff = compute_diff(
            parse("4 Lightning Bolt\n\nSideboard\n1 Negate"),
            parse("4 Lightning Bolt\n1 Negate\nSideboard\n1 Duress"),
        )

        assert diff.mainboard.cards_in == (CardCount(name="Negate", quantity=1),)
        assert diff.sideboard.cards_out == (CardCount(name="Negate", quantity=1),)
        assert diff.sideboard.cards_in == (CardCount(name="Duress", quantity=1),)

    def test_deterministic_ordering(self) -> None:
        before = parse("")
        after = parse("4 Zenith\n2 alpha\n3 Mountain\n1 Beta")
        first = compute_diff(before, after)
        second = compute_diff(before, after)

        names = [card.name for card in first.mainboard.cards_in]
        assert names == ["alpha", "Beta", "Mountain", "Zenith"]
        assert first == second
        assert first.to_dict() == second.to_dict()

    @pytest.mark.parametrize("field", ["cards_out", "quantity_changes"])
    def test_other_sequences_sorted(self, field: str) -> None:
        before = parse("4 Zenith\n2 Alpha\n3 Mountain")
        after = parse("3 Zenith\n1 Alpha\n4 Mountain") if field == "quantity_changes" else parse("")
        diff = compute_diff(before, after)

        names = [change.name for change in getattr(diff.mainboard, field)]
        assert names == ["Alpha", "Mountain", "Zenith"]


class TestPassthrough:
    def test_commanders_from_after(self) -> None:
        diff = compute_diff(make_deck(commanders=("Atraxa",)), make_deck(commanders=("Kenrith",)))
        assert diff.commanders == ("Kenrith",)

    def test_no_commanders_in_after(self) -> None:
        diff = compute_diff(make_deck(commanders=("Atraxa",)), make_deck())
        assert diff.commanders == ()

    def test_has_sideboard_from_before(self) -> None:
        assert compute_diff(make_deck(side={"Fatal Push": 2}), make_deck()).has_sideboard is True

    def test_has_sideboard_from_after(self) -> None:
        assert compute_diff(make_deck(), make_deck(side={"Fatal Push": 2})).has_sideboard is True

    def test_no_sideboard(self) -> None:
        deck = make_deck(main={"Lightning Bolt": 4})
        assert compute_diff(deck, deck).has_sideboard is False

    def test_commander_change_end_to_end(self) -> None:
        before = parse("Commander\n1 Atraxa, Praetors' Voice\n\n4 Sol Ring")
        after = parse("Commander\n1 Kenrith, the Returned King\n\n4 Sol Ring\n2 Lightning Bolt")
        diff = compute_diff(before, after)

        assert diff.commanders == ("Kenrith, the Returned King",)
        assert [c.name for c in diff.mainboard.cards_in] == [
            "Kenrith, the Returned King",
            "Lightning Bolt",
        ]
        assert [c.name for c in diff.mainboard.cards_out] == ["Atraxa, Praetors' Voice"]
