"""
The three parts of a physical deck.

Deck storage only distinguishes the playing and side counters. Whether a
playing copy belongs to the Main or the Extra deck is decided here, from
the card type in the catalog.
"""

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import TYPE_CHECKING

from ygodeck.models.card import Card
from ygodeck.models.catalog import CardCatalog, Id
from ygodeck.models.deck import DeckEntry, PartType

if TYPE_CHECKING:
    from ygodeck.models.deck import Deck
    from ygodeck.models.editable_deck import EditableDeck


class DeckPart(str, Enum):
    MAIN = "main"
    EXTRA = "extra"
    SIDE = "side"

    @classmethod
    def iter(cls) -> Iterator["DeckPart"]:
        """Parts in display and export order: Main, Extra, Side."""
        return iter((cls.MAIN, cls.EXTRA, cls.SIDE))

    @property
    def min(self) -> int:
        return _BOUNDS[self][0]

    @property
    def max(self) -> int:
        return _BOUNDS[self][1]

    @property
    def part_type(self) -> PartType:
        if self is DeckPart.SIDE:
            return PartType.SIDE
        return PartType.PLAYING

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def can_contain(self, card: Card | None) -> bool:
        """
        Whether a card may be placed in this part.

        Cards missing from the catalog can only be placed in the Side deck.
        """
        if self is DeckPart.SIDE:
            return True
        if card is None:
            return False

        is_extra = card.card_type.is_extra_deck_monster()
        if self is DeckPart.EXTRA:
            return is_extra
        return not is_extra


# Inclusive (min, max) card counts per part
_BOUNDS: dict[DeckPart, tuple[int, int]] = {
    DeckPart.MAIN: (40, 60),
    DeckPart.EXTRA: (0, 15),
    DeckPart.SIDE: (0, 15),
}


def entries_for_part(
    entries: Iterable[DeckEntry],
    part: DeckPart,
    catalog: CardCatalog,
) -> Iterator[tuple[Id, int]]:
    """
    Cards of one deck part with their counts.

    Args:
        entries: Deck entries, typically Deck.entries()
        part: The part to select
        catalog: Catalog used to classify cards

    Yields:
        (id, count) for every entry with copies in this part, in entry order
    """
    part_type = part.part_type
    for entry in entries:
        count = entry.count(part_type)
        if count > 0 and part.can_contain(catalog.get(entry.id)):
            yield entry.id, count


def part_totals(deck: "Deck | EditableDeck", catalog: CardCatalog) -> dict[DeckPart, int]:
    """
    Number of cards per deck part.

    Exposed for rule checking by callers; no legality verdict is made here.
    Playing copies of cards missing from the catalog are not counted in any part.
    """
    return {
        part: sum(count for _, count in entries_for_part(deck.entries(), part, catalog))
        for part in DeckPart.iter()
    }
