from ygodeck.models.card import Card, CardType
from ygodeck.models.catalog import CardCatalog
from ygodeck.models.deck import Deck, DeckEntry, PartType
from ygodeck.models.deck_part import DeckPart, entries_for_part, part_totals


class TestDeckPart:
    def test_order(self) -> None:
        assert list(DeckPart.iter()) == [DeckPart.MAIN, DeckPart.EXTRA, DeckPart.SIDE]

    def test_bounds(self) -> None:
        assert (DeckPart.MAIN.min, DeckPart.MAIN.max) == (40, 60)
        assert (DeckPart.EXTRA.min, DeckPart.EXTRA.max) == (0, 15)
        assert (DeckPart.SIDE.min, DeckPart.SIDE.max) == (0, 15)

    def test_part_types(self) -> None:
        assert DeckPart.MAIN.part_type is PartType.PLAYING
        assert DeckPart.EXTRA.part_type is PartType.PLAYING
        assert DeckPart.SIDE.part_type is PartType.SIDE

    def test_display_name(self) -> None:
        assert DeckPart.EXTRA.display_name == "Extra"


class TestCanContain:
    def test_main_deck_cards(self, catalog: CardCatalog) -> None:
        for card_id in (0, 2, 3, 5):
            card = catalog[card_id]
            assert DeckPart.MAIN.can_contain(card)
            assert not DeckPart.EXTRA.can_contain(card)

    def test_extra_deck_monsters(self, catalog: CardCatalog) -> None:
        """Synchro and Link monsters belong to the Extra deck."""
        for card_id in (6, 7):
            card = catalog[card_id]
            assert DeckPart.EXTRA.can_contain(card)
            assert not DeckPart.MAIN.can_contain(card)

    def test_side_accepts_everything(self, catalog: CardCatalog) -> None:
        assert all(DeckPart.SIDE.can_contain(card) for card in catalog.cards())

    def test_unknown_card_side_only(self) -> None:
        assert DeckPart.SIDE.can_contain(None)
        assert not DeckPart.MAIN.can_contain(None)
        assert not DeckPart.EXTRA.can_contain(None)

    def test_pendulum_monster_is_main_deck(self) -> None:
        card = Card(
            name="Odd-Eyes Pendulum Dragon",
            password=16178681,
            card_type=CardType.monster(level=7, pendulum_scale=4),
        )

        assert DeckPart.MAIN.can_contain(card)


class TestPartTotals:
    def test_entries_for_part(self, catalog: CardCatalog) -> None:
        deck = Deck.from_entries(
            [
                DeckEntry(id=0, playing=3, side=1),
                DeckEntry(id=6, playing=2),
                DeckEntry(id=7, side=2),
            ]
        )

        assert list(entries_for_part(deck.entries(), DeckPart.MAIN, catalog)) == [(0, 3)]
        assert list(entries_for_part(deck.entries(), DeckPart.EXTRA, catalog)) == [(6, 2)]
        assert list(entries_for_part(deck.entries(), DeckPart.SIDE, catalog)) == [(0, 1), (7, 2)]

    def test_part_totals(self, catalog: CardCatalog) -> None:
        deck = Deck.from_entries(
            [
                DeckEntry(id=0, playing=3),
                DeckEntry(id=3, playing=1, side=2),
                DeckEntry(id=7, playing=1),
            ]
        )

        assert part_totals(deck, catalog) == {
            DeckPart.MAIN: 4,
            DeckPart.EXTRA: 1,
            DeckPart.SIDE: 2,
        }

    def test_unknown_ids_only_count_in_side(self, catalog: CardCatalog) -> None:
        deck = Deck.from_entries([DeckEntry(id=99, playing=2, side=1)])

        assert part_totals(deck, catalog) == {
            DeckPart.MAIN: 0,
            DeckPart.EXTRA: 0,
            DeckPart.SIDE: 1,
        }
