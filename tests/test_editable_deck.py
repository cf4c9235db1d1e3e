import pytest

from ygodeck.config import MAX_COUNT
from ygodeck.models.catalog import CardCatalog
from ygodeck.models.deck import DeckEntry, PartType
from ygodeck.models.editable_deck import DeckMessage, EditableDeck, MessageKind


def snapshot(deck: EditableDeck) -> list[DeckEntry]:
    return list(deck.entries())


class TestDeckMessage:
    def test_invert_flips_kind(self) -> None:
        message = DeckMessage(MessageKind.INC, 2, PartType.SIDE, 3)

        assert message.invert() == DeckMessage(MessageKind.DEC, 2, PartType.SIDE, 3)
        assert message.invert().invert() == message

    def test_encode(self, catalog: CardCatalog) -> None:
        message = DeckMessage(MessageKind.DEC, 0, PartType.PLAYING, 2)

        assert message.encode(catalog) == "-p46986414:2"

    def test_decode_alias(self, catalog: CardCatalog) -> None:
        message = DeckMessage.decode("+s89631140:1", catalog)

        assert message == DeckMessage(MessageKind.INC, 1, PartType.SIDE, 1)


class TestEditableDeckHistory:
    def test_records_applied_amount(self) -> None:
        """Saturated mutations are recorded with the amount that took effect."""
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 250)

        applied = deck.increment(1, PartType.PLAYING, 10)

        assert applied == 5
        assert deck.history.entries[-1] == DeckMessage(MessageKind.INC, 1, PartType.PLAYING, 5)

    def test_ineffective_mutation_not_recorded(self) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, MAX_COUNT)

        assert deck.increment(1, PartType.PLAYING, 1) == 0
        assert deck.decrement(2, PartType.SIDE, 1) == 0
        assert len(deck.history.entries) == 1

    def test_undo_reverts_change(self) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 2)

        message = deck.undo()

        assert message == DeckMessage(MessageKind.DEC, 1, PartType.PLAYING, 2)
        assert deck.deck.is_empty()
        assert deck.can_redo

    def test_redo_reapplies_change(self) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.SIDE, 2)
        deck.undo()

        message = deck.redo()

        assert message == DeckMessage(MessageKind.INC, 1, PartType.SIDE, 2)
        assert deck.count(1, PartType.SIDE) == 2
        assert not deck.can_redo

    def test_undo_redo_without_history(self) -> None:
        deck = EditableDeck()

        assert deck.undo() is None
        assert deck.redo() is None

    def test_undo_all_then_redo_all_restores_state(self) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 3)
        deck.increment(6, PartType.PLAYING, 1)
        deck.decrement(1, PartType.PLAYING, 1)
        deck.increment(3, PartType.SIDE, 2)
        deck.decrement(6, PartType.PLAYING, 5)
        before = snapshot(deck)

        undone = 0
        while deck.undo() is not None:
            undone += 1

        assert undone == 5
        assert deck.deck.is_empty()

        for _ in range(undone):
            deck.redo()

        assert snapshot(deck) == before

    def test_new_change_discards_redo(self) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 1)
        deck.undo()

        deck.increment(2, PartType.PLAYING, 1)

        assert deck.redo() is None
        assert snapshot(deck) == [DeckEntry(id=2, playing=1)]

    def test_reset_history(self) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 1)

        deck.reset_history()

        assert not deck.can_undo
        assert deck.count(1, PartType.PLAYING) == 1

    def test_diverged_history_detected(self) -> None:
        """Replaying a message against a deck it no longer describes fails loudly."""
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 2)
        deck.deck.decrement(1, PartType.PLAYING, 1)

        with pytest.raises(AssertionError):
            deck.undo()


class TestEditableDeckEncoding:
    def test_empty_deck(self, catalog: CardCatalog) -> None:
        encoded = EditableDeck().encode(catalog)

        assert encoded == " 0;"
        decoded = EditableDeck.decode(encoded, catalog)
        assert decoded is not None
        assert snapshot(decoded) == []
        assert not decoded.can_undo

    def test_round_trip_preserves_history(self, catalog: CardCatalog) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 3)
        deck.increment(7, PartType.PLAYING, 1)
        deck.increment(5, PartType.SIDE, 2)
        deck.undo()

        encoded = deck.encode(catalog)
        decoded = EditableDeck.decode(encoded, catalog)

        assert encoded == "89631139:3:0,1861629:1:0 1;+p89631139:3,+p1861629:1,+s44095762:2"
        assert decoded == deck
        assert decoded.redo() == DeckMessage(MessageKind.INC, 5, PartType.SIDE, 2)
        assert decoded.count(5, PartType.SIDE) == 2

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "89631139:3:0",
            "89631139:3:0 ",
            "89631139:3 0;",
            "89631139:3:0 1;",
            "12345678:3:0 0;",
            " 0;+p12345678:1",
            "46986414:1:0 0;+p46986414:5",
            "46986414:255:0 1;+p46986414:1",
            " 0;+s46986414:1",
        ],
    )
    def test_decode_malformed(self, catalog: CardCatalog, text: str) -> None:
        assert EditableDeck.decode(text, catalog) is None


    def test_decode_accepts_consistent_history(self, catalog: CardCatalog) -> None:
        """A log that replays exactly is kept, including its undone tail."""
        decoded = EditableDeck.decode("46986414:1:0 1;+p46986414:1,+p46986414:2", catalog)

        assert decoded is not None
        assert decoded.redo() == DeckMessage(MessageKind.INC, 0, PartType.PLAYING, 2)
        assert decoded.count(0, PartType.PLAYING) == 3
        while decoded.undo() is not None:
            pass
        assert snapshot(decoded) == []
