"""
Deck with undo/redo history.

EditableDeck is the deck value held by the application: every mutation goes
through it so that the history always mirrors the deck. Only the amount that
actually took effect is recorded, and mutations without any effect are not
recorded at all.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Self

from ygodeck.models.catalog import Id
from ygodeck.models.deck import Deck, DeckEntry, PartType
from ygodeck.models.text_encoding import (
    DECK_SEPARATOR,
    FIELD_SEPARATOR,
    parse_count,
    password_text,
    resolve_password,
)
from ygodeck.models.undo_redo import UndoRedo

if TYPE_CHECKING:
    from ygodeck.models.catalog import CardCatalog


class MessageKind(str, Enum):
    """Direction of a deck delta. Values are the encoded sign characters."""

    INC = "+"
    DEC = "-"


_PART_CODES: dict[PartType, str] = {PartType.PLAYING: "p", PartType.SIDE: "s"}
_PART_TYPES: dict[str, PartType] = {code: part for part, code in _PART_CODES.items()}


@dataclass(frozen=True, slots=True)
class DeckMessage:
    """
    One applied deck mutation.

    Attributes:
        kind: Increment or decrement
        id: Internal card id
        part_type: Counter that changed
        amount: Copies actually added or removed
    """

    kind: MessageKind
    id: Id
    part_type: PartType
    amount: int

    def invert(self) -> "DeckMessage":
        kind = MessageKind.DEC if self.kind is MessageKind.INC else MessageKind.INC
        return replace(self, kind=kind)

    def apply(self, deck: Deck) -> int:
        """Apply to a deck without recording; returns the applied amount."""
        if self.kind is MessageKind.INC:
            return deck.increment(self.id, self.part_type, self.amount)
        return deck.decrement(self.id, self.part_type, self.amount)

    def encode(self, catalog: "CardCatalog") -> str:
        """Encode as "{sign}{part}{password}:{count}", e.g. "+p89631139:2"."""
        password = password_text(self.id, catalog)
        part = _PART_CODES[self.part_type]
        return f"{self.kind.value}{part}{password}{FIELD_SEPARATOR}{self.amount}"

    @classmethod
    def decode(cls, text: str, catalog: "CardCatalog") -> Self | None:
        if len(text) < 2:
            return None

        try:
            kind = MessageKind(text[0])
        except ValueError:
            return None

        part_type = _PART_TYPES.get(text[1])
        if part_type is None:
            return None

        fields = text[2:].split(FIELD_SEPARATOR)
        if len(fields) != 2:
            return None

        card_id = resolve_password(fields[0], catalog)
        amount = parse_count(fields[1])
        if card_id is None or amount is None:
            return None

        return cls(kind=kind, id=card_id, part_type=part_type, amount=amount)


@dataclass
class EditableDeck:
    """
    A Deck paired with its undo/redo log.

    Attributes:
        deck: Current deck contents
        history: Applied mutations
    """

    deck: Deck = field(default_factory=Deck)
    history: UndoRedo[DeckMessage] = field(default_factory=UndoRedo)

    def increment(self, card_id: Id, part_type: PartType, amount: int = 1) -> int:
        applied = self.deck.increment(card_id, part_type, amount)
        self._record(MessageKind.INC, card_id, part_type, applied)
        return applied

    def decrement(self, card_id: Id, part_type: PartType, amount: int = 1) -> int:
        applied = self.deck.decrement(card_id, part_type, amount)
        self._record(MessageKind.DEC, card_id, part_type, applied)
        return applied

    def undo(self) -> DeckMessage | None:
        """Revert the most recent mutation. Returns the message applied, if any."""
        return self._replay(self.history.undo())

    def redo(self) -> DeckMessage | None:
        """Re-apply the most recently undone mutation. Returns it, if any."""
        return self._replay(self.history.redo())

    def reset_history(self) -> None:
        """Forget all history; the current contents become the baseline."""
        self.history = UndoRedo()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def entries(self) -> Iterator[DeckEntry]:
        return self.deck.entries()

    def count(self, card_id: Id, part_type: PartType) -> int:
        return self.deck.count(card_id, part_type)

    def encode(self, catalog: "CardCatalog") -> str:
        """Encoded entries, one space, encoded history."""
        return f"{self.deck.encode(catalog)}{DECK_SEPARATOR}{self.history.encode(catalog)}"

    @classmethod
    def decode(cls, text: str, catalog: "CardCatalog") -> Self | None:
        deck_text, separator, history_text = text.partition(DECK_SEPARATOR)
        if not separator:
            return None

        deck = Deck.decode(deck_text, catalog)
        history = UndoRedo.decode(history_text, catalog, DeckMessage)
        if deck is None or history is None:
            return None

        # The log must describe exactly these contents
        if not _history_matches(deck, history):
            return None

        return cls(deck=deck, history=history)

    def _record(self, kind: MessageKind, card_id: Id, part_type: PartType, applied: int) -> None:
        if applied:
            self.history.push_action(DeckMessage(kind, card_id, part_type, applied))

    def _replay(self, message: DeckMessage | None) -> DeckMessage | None:
        if message is None:
            return None

        applied = message.apply(self.deck)
        # A mismatch means the history no longer describes this deck
        assert applied == message.amount, f"history out of sync: {message} applied {applied}"
        return message


def _history_matches(deck: Deck, history: UndoRedo[DeckMessage]) -> bool:
    """
    Whether every logged message replays exactly against the deck.

    Redoes the undone tail from the current contents, then undoes the whole
    log back to the start, on a scratch copy. Each step must apply its full
    amount.
    """
    scratch = deck.copy()
    active = len(history.entries) - history.offset

    for message in history.entries[active:]:
        if message.apply(scratch) != message.amount:
            return False

    for message in reversed(history.entries):
        if message.invert().apply(scratch) != message.amount:
            return False

    return True
