"""
Deck state persistence.

Deck state is stored as one encoded string per storage key. Stored state that
can no longer be decoded (for example because a card left the catalog) must
never block the user: it degrades to an empty deck, with a warning logged.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ygodeck.db.operations import delete_saved_deck, get_saved_deck, save_deck_text
from ygodeck.models.catalog import CardCatalog
from ygodeck.models.editable_deck import EditableDeck

logger = logging.getLogger(__name__)


def decode_or_default(encoded: str | None, catalog: CardCatalog) -> EditableDeck:
    """Decode deck state, falling back to an empty deck on any failure."""
    if not encoded:
        return EditableDeck()

    deck = EditableDeck.decode(encoded, catalog)
    if deck is None:
        logger.warning("Discarding undecodable deck state (%d chars)", len(encoded))
        return EditableDeck()

    return deck


async def load_deck(
    session: AsyncSession,
    storage_key: str,
    catalog: CardCatalog,
) -> EditableDeck:
    """
    Load the deck stored under a key.

    Returns an empty deck if nothing is stored or the stored state is invalid.
    """
    saved = await get_saved_deck(session, storage_key)
    if saved is None:
        return EditableDeck()

    return decode_or_default(saved.encoded, catalog)


async def store_deck(
    session: AsyncSession,
    storage_key: str,
    deck: EditableDeck,
    catalog: CardCatalog,
) -> str:
    """
    Store a deck under a key, replacing what was there.

    Returns:
        The encoded state that was written
    """
    encoded = deck.encode(catalog)
    await save_deck_text(session, storage_key, encoded)
    return encoded


async def clear_deck(session: AsyncSession, storage_key: str) -> bool:
    """Remove stored state. Returns True if something was removed."""
    return await delete_saved_deck(session, storage_key)
