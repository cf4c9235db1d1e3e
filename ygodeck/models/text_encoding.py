"""
Compact text encoding for deck state.

Deck state is persisted as a single short string (local storage, share URLs).
Types that take part implement the TextEncoding protocol:

    encode(catalog) -> str
    decode(text, catalog) -> instance | None

Cards are written by primary password, never by internal id, so encoded
state survives catalog rebuilds. Decoding never raises on malformed input and
never mutates existing state; any malformed field yields None and the caller
falls back to a default value.
"""

import re
from typing import TYPE_CHECKING, Protocol, Self

from ygodeck.config import MAX_COUNT
from ygodeck.models.card import MAX_PASSWORD

if TYPE_CHECKING:
    from ygodeck.models.catalog import CardCatalog, Id

_DIGITS = re.compile(r"[0-9]+")

ENTRY_SEPARATOR = ","
FIELD_SEPARATOR = ":"
HISTORY_SEPARATOR = ";"
DECK_SEPARATOR = " "


class TextEncoding(Protocol):
    """Round-trip serialization into the compact deck text format."""

    def encode(self, catalog: "CardCatalog") -> str: ...

    @classmethod
    def decode(cls, text: str, catalog: "CardCatalog") -> Self | None: ...


def parse_unsigned(text: str, maximum: int) -> int | None:
    """Parse a plain decimal number in [0, maximum], or None."""
    if not _DIGITS.fullmatch(text):
        return None
    value = int(text)
    if value > maximum:
        return None
    return value


def parse_count(text: str) -> int | None:
    """Parse a counter value (unsigned byte)."""
    return parse_unsigned(text, MAX_COUNT)


def resolve_password(text: str, catalog: "CardCatalog") -> "Id | None":
    """Parse a password field and resolve it to an internal id."""
    password = parse_unsigned(text, MAX_PASSWORD)
    if password is None:
        return None
    return catalog.id_for_password(password)


def password_text(card_id: "Id", catalog: "CardCatalog") -> str:
    """Primary password of a card as text; the id must be in the catalog."""
    return str(catalog[card_id].password)
