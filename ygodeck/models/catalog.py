"""
Card catalog lookup.

The catalog is an immutable snapshot: it is built once from the card list
and shared read-only by everything that needs lookups. Internal ids are
positions in the card list, so they change between catalog builds and must
never be persisted; passwords are used for storage and interchange instead.
"""

from collections.abc import Iterable, Iterator

from ygodeck.models.card import Card, CardPassword

# Internal card id. Index into the catalog's card list.
Id = int


class CardCatalog:
    """
    Indexed card lookup with password alias resolution.

    Every password of a card (primary and aliases) resolves to the same id.
    If two cards claim the same password, the first one wins.
    """

    __slots__ = ("_cards", "_passwords")

    def __init__(self, cards: Iterable[Card]) -> None:
        self._cards: tuple[Card, ...] = tuple(cards)
        self._passwords: dict[CardPassword, Id] = {}

        for card_id, card in enumerate(self._cards):
            for password in card.all_passwords:
                self._passwords.setdefault(password, card_id)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return isinstance(card_id, int) and 0 <= card_id < len(self._cards)

    def __getitem__(self, card_id: Id) -> Card:
        card = self.get(card_id)
        if card is None:
            raise KeyError(card_id)
        return card

    def get(self, card_id: Id) -> Card | None:
        """Card for an internal id, or None if the id is unknown."""
        if card_id not in self:
            return None
        return self._cards[card_id]

    def entries(self) -> Iterator[tuple[Id, Card]]:
        """All (id, card) pairs in id order."""
        return enumerate(self._cards)

    def cards(self) -> tuple[Card, ...]:
        return self._cards

    def id_for_password(self, password: CardPassword) -> Id | None:
        """Canonical id for a primary or alternate password, or None."""
        return self._passwords.get(password)

    def normalize(self, identifier: int) -> Id | None:
        """
        Resolve an interchange identifier to its canonical id.

        Interchange files name cards by password, possibly the password of an
        alternate printing; all of them collapse onto one catalog entry.
        """
        return self.id_for_password(identifier)

    def password_for_id(self, card_id: Id) -> CardPassword | None:
        """Primary password of a card, or None if the id is unknown."""
        card = self.get(card_id)
        return None if card is None else card.password
