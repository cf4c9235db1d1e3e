"""
Database CRUD operations for saved deck state.

The database only ever sees encoded text; encoding and decoding happen in
ygodeck.services.deck_storage.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ygodeck.models.db import SavedDeckDB


async def get_saved_deck(session: AsyncSession, storage_key: str) -> SavedDeckDB | None:
    """
    Get saved deck state by storage key.

    Returns None if nothing is stored under this key.
    """
    result = await session.execute(
        select(SavedDeckDB).where(SavedDeckDB.storage_key == storage_key)
    )
    return result.scalar_one_or_none()


async def save_deck_text(session: AsyncSession, storage_key: str, encoded: str) -> SavedDeckDB:
    """
    Insert or replace the encoded deck state stored under a key.
    """
    saved = await get_saved_deck(session, storage_key)
    if saved is None:
        saved = SavedDeckDB(storage_key=storage_key, encoded=encoded)
        session.add(saved)
    else:
        saved.encoded = encoded

    await session.flush()
    return saved


async def delete_saved_deck(session: AsyncSession, storage_key: str) -> bool:
    """
    Delete the deck state stored under a key.

    Returns True if deleted, False if not found.
    """
    saved = await get_saved_deck(session, storage_key)
    if not saved:
        return False

    await session.delete(saved)
    return True
