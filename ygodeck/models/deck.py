"""
Deck storage.

A Deck is a sparse multiset of cards: one entry per card id, each entry
holding two independent counters, one for the playing deck (Main and Extra,
which one is decided by the card type) and one for the Side deck.

INVARIANTS:
- Entries are strictly ascending by id, without duplicates
- No entry is stored with both counters at zero
- Counters stay within [0, MAX_COUNT]; arithmetic saturates instead of wrapping
"""

from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Self

from ygodeck.config import MAX_COUNT
from ygodeck.models.catalog import Id
from ygodeck.models.text_encoding import (
    ENTRY_SEPARATOR,
    FIELD_SEPARATOR,
    parse_count,
    password_text,
    resolve_password,
)

if TYPE_CHECKING:
    from ygodeck.models.catalog import CardCatalog


class PartType(str, Enum):
    """The two counters tracked per deck entry."""

    # Main or Extra deck (depends on the card)
    PLAYING = "playing"
    SIDE = "side"


def _check_amount(amount: int) -> None:
    if not 0 <= amount <= MAX_COUNT:
        raise ValueError(f"amount must be within 0..{MAX_COUNT}, got {amount}")


@dataclass(frozen=True, slots=True)
class DeckEntry:
    """
    One card of a deck with its two counters.

    Attributes:
        id: Internal card id
        playing: Copies in the Main/Extra deck
        side: Copies in the Side deck
    """

    id: Id
    playing: int = 0
    side: int = 0

    def count(self, part_type: PartType) -> int:
        if part_type == PartType.PLAYING:
            return self.playing
        return self.side

    def encode(self, catalog: "CardCatalog") -> str:
        """Encode as "{password}:{playing}:{side}"."""
        return FIELD_SEPARATOR.join(
            (password_text(self.id, catalog), str(self.playing), str(self.side))
        )

    @classmethod
    def decode(cls, text: str, catalog: "CardCatalog") -> Self | None:
        fields = text.split(FIELD_SEPARATOR)
        if len(fields) != 3:
            return None

        card_id = resolve_password(fields[0], catalog)
        playing = parse_count(fields[1])
        side = parse_count(fields[2])
        if card_id is None or playing is None or side is None:
            return None

        # Stored entries are never empty
        if playing == 0 and side == 0:
            return None

        return cls(id=card_id, playing=playing, side=side)


class Deck:
    """
    Ordered sparse multiset of card ids.

    Mutations report how much of the requested amount actually took effect,
    which may be less than requested at the counter boundaries.
    """

    __slots__ = ("_ids", "_counts")

    def __init__(self) -> None:
        self._ids: list[Id] = []
        # [playing, side] per entry, parallel to _ids
        self._counts: list[list[int]] = []

    @classmethod
    def from_entries(cls, entries: Iterable[DeckEntry]) -> Self:
        """
        Build a deck from entries in any order.

        Entries for the same id are merged by adding their counters
        (saturating). Entries without any copies are dropped.
        """
        deck = cls()
        for entry in sorted(entries, key=lambda e: e.id):
            for part_type in PartType:
                amount = entry.count(part_type)
                if amount:
                    deck.increment(entry.id, part_type, amount)
        return deck

    def increment(self, card_id: Id, part_type: PartType, amount: int) -> int:
        """
        Add copies of a card, saturating at MAX_COUNT.

        Returns:
            Number of copies actually added (0..amount)
        """
        _check_amount(amount)
        idx = bisect_left(self._ids, card_id)
        if idx == len(self._ids) or self._ids[idx] != card_id:
            self._ids.insert(idx, card_id)
            self._counts.insert(idx, [0, 0])

        counts = self._counts[idx]
        slot = _slot(part_type)
        applied = min(amount, MAX_COUNT - counts[slot])
        counts[slot] += applied

        # A zero-amount increment on a new id must not leave an empty entry
        if counts == [0, 0]:
            self._remove(idx)

        return applied

    def decrement(self, card_id: Id, part_type: PartType, amount: int) -> int:
        """
        Remove copies of a card, clamping at zero.

        The entry disappears once both counters reach zero.

        Returns:
            Number of copies actually removed (0..amount)
        """
        _check_amount(amount)
        idx = self._index(card_id)
        if idx is None:
            return 0

        counts = self._counts[idx]
        slot = _slot(part_type)
        applied = min(amount, counts[slot])
        counts[slot] -= applied

        if counts == [0, 0]:
            self._remove(idx)

        return applied

    def count(self, card_id: Id, part_type: PartType) -> int:
        idx = self._index(card_id)
        if idx is None:
            return 0
        return self._counts[idx][_slot(part_type)]

    def entries(self) -> Iterator[DeckEntry]:
        """Entries in ascending id order. Each call starts a fresh iteration."""
        for card_id, (playing, side) in zip(self._ids, self._counts, strict=True):
            yield DeckEntry(id=card_id, playing=playing, side=side)

    def copy(self) -> "Deck":
        return Deck.from_entries(self.entries())

    def is_empty(self) -> bool:
        return not self._ids

    def encode(self, catalog: "CardCatalog") -> str:
        """Comma-joined encoded entries; empty string for an empty deck."""
        return ENTRY_SEPARATOR.join(entry.encode(catalog) for entry in self.entries())

    @classmethod
    def decode(cls, text: str, catalog: "CardCatalog") -> Self | None:
        if not text:
            return cls()

        entries: list[DeckEntry] = []
        for part in text.split(ENTRY_SEPARATOR):
            entry = DeckEntry.decode(part, catalog)
            if entry is None:
                return None
            entries.append(entry)

        return cls.from_entries(entries)

    def __iter__(self) -> Iterator[DeckEntry]:
        return self.entries()

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, card_id: object) -> bool:
        return isinstance(card_id, int) and self._index(card_id) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self._ids == other._ids and self._counts == other._counts

    def __repr__(self) -> str:
        return f"Deck({list(self.entries())!r})"

    def _index(self, card_id: Id) -> int | None:
        idx = bisect_left(self._ids, card_id)
        if idx < len(self._ids) and self._ids[idx] == card_id:
            return idx
        return None

    def _remove(self, idx: int) -> None:
        del self._ids[idx]
        del self._counts[idx]


def _slot(part_type: PartType) -> int:
    return 0 if part_type == PartType.PLAYING else 1
