"""Tests for deck state persistence."""

import logging

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ygodeck.db.operations import get_saved_deck, save_deck_text
from ygodeck.models.catalog import CardCatalog
from ygodeck.models.deck import PartType
from ygodeck.models.editable_deck import EditableDeck
from ygodeck.services.deck_storage import clear_deck, decode_or_default, load_deck, store_deck


class TestDecodeOrDefault:
    def test_missing_state(self, catalog: CardCatalog) -> None:
        assert decode_or_default(None, catalog).deck.is_empty()
        assert decode_or_default("", catalog).deck.is_empty()

    def test_valid_state(self, catalog: CardCatalog) -> None:
        deck = decode_or_default("46986414:2:0 0;+p46986414:2", catalog)

        assert deck.count(0, PartType.PLAYING) == 2
        assert deck.can_undo

    def test_invalid_state_falls_back(
        self, catalog: CardCatalog, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A card that left the catalog must not block the user."""
        with caplog.at_level(logging.WARNING):
            deck = decode_or_default("12345678:2:0 0;", catalog)

        assert deck.deck.is_empty()
        assert not deck.can_undo
        assert "undecodable" in caplog.text


class TestDeckStorage:
    async def test_load_missing_key(self, session: AsyncSession, catalog: CardCatalog) -> None:
        deck = await load_deck(session, "deck", catalog)

        assert deck.deck.is_empty()

    async def test_store_and_load(self, session: AsyncSession, catalog: CardCatalog) -> None:
        deck = EditableDeck()
        deck.increment(1, PartType.PLAYING, 3)
        deck.increment(4, PartType.SIDE, 1)
        deck.undo()

        encoded = await store_deck(session, "deck", deck, catalog)
        loaded = await load_deck(session, "deck", catalog)

        assert encoded == deck.encode(catalog)
        assert loaded == deck
        assert loaded.can_redo

    async def test_load_corrupt_state(self, session: AsyncSession, catalog: CardCatalog) -> None:
        await save_deck_text(session, "deck", "not a deck")

        deck = await load_deck(session, "deck", catalog)

        assert deck == EditableDeck()

    async def test_clear(self, session: AsyncSession, catalog: CardCatalog) -> None:
        await store_deck(session, "deck", EditableDeck(), catalog)

        assert await clear_deck(session, "deck") is True
        assert await get_saved_deck(session, "deck") is None
        assert await clear_deck(session, "deck") is False

    async def test_load_state_with_mismatched_history(
        self, session: AsyncSession, catalog: CardCatalog
    ) -> None:
        """A log claiming more copies than the deck holds is discarded with the deck."""
        await save_deck_text(session, "deck", "46986414:1:0 0;+p46986414:5")

        deck = await load_deck(session, "deck", catalog)

        assert deck == EditableDeck()
        assert deck.undo() is None
