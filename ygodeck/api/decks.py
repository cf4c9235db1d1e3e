"""
Deck API endpoints.

Every deck lives under a storage key. Each request loads the stored state,
applies one operation through EditableDeck (so undo/redo history stays in
step with the contents), stores the result and returns the new state.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from ygodeck.config import MAX_COUNT, YDK_FILE_NAME, YDK_MIME_TYPE
from ygodeck.db.database import get_session
from ygodeck.models.catalog import CardCatalog, Id
from ygodeck.models.deck import PartType
from ygodeck.models.deck_part import DeckPart, entries_for_part
from ygodeck.models.editable_deck import DeckMessage, EditableDeck
from ygodeck.models.failure import ApiResponse, FailureKind, KnownError
from ygodeck.parsers import ydk
from ygodeck.services.catalog_store import CatalogFormatError, get_catalog
from ygodeck.services.deck_order import deck_order_key
from ygodeck.services.deck_storage import clear_deck, load_deck, store_deck

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


def require_catalog() -> CardCatalog:
    """Dependency that provides the card catalog, or 503 if it is missing."""
    try:
        return get_catalog()
    except (FileNotFoundError, CatalogFormatError) as e:
        logger.error("Card catalog unavailable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Card catalog not available. Please try again later.",
        ) from e


SessionDep = Annotated[AsyncSession, Depends(get_session)]
CatalogDep = Annotated[CardCatalog, Depends(require_catalog)]
StorageKey = Annotated[str, Path(min_length=1, max_length=255)]


# --- Request / response models ---


class ChangeRequest(BaseModel):
    """Add or remove copies of a card."""

    password: int = Field(..., ge=0, description="Card password")
    part_type: PartType = Field(default=PartType.PLAYING)
    amount: int = Field(default=1, ge=1, le=MAX_COUNT)


class ImportRequest(BaseModel):
    """YDK document to replace the deck with."""

    ydk: str


class CardCountResponse(BaseModel):
    password: int
    name: str
    count: int


class DeckPartResponse(BaseModel):
    part: DeckPart
    total: int
    min: int
    max: int
    cards: list[CardCountResponse] = Field(default_factory=list)


class DeckStateResponse(BaseModel):
    """Deck contents per part, in display order."""

    storage_key: str
    parts: list[DeckPartResponse]
    can_undo: bool
    can_redo: bool
    encoded: str


class ChangeResponse(BaseModel):
    """Result of a mutation, including how much of it took effect."""

    applied: int
    state: DeckStateResponse


# --- Helpers ---


def build_state(
    storage_key: str,
    deck: EditableDeck,
    catalog: CardCatalog,
    encoded: str,
) -> DeckStateResponse:
    """Build the deck view: every part sorted in display order."""
    parts: list[DeckPartResponse] = []
    for part in DeckPart.iter():
        cards = [
            (card, count)
            for card_id, count in entries_for_part(deck.entries(), part, catalog)
            if (card := catalog.get(card_id)) is not None
        ]
        cards.sort(key=lambda item: deck_order_key(item[0]))
        parts.append(
            DeckPartResponse(
                part=part,
                total=sum(count for _, count in cards),
                min=part.min,
                max=part.max,
                cards=[
                    CardCountResponse(password=card.password, name=card.name, count=count)
                    for card, count in cards
                ],
            )
        )

    return DeckStateResponse(
        storage_key=storage_key,
        parts=parts,
        can_undo=deck.can_undo,
        can_redo=deck.can_redo,
        encoded=encoded,
    )


def resolve_card(password: int, catalog: CardCatalog) -> Id:
    card_id = catalog.id_for_password(password)
    if card_id is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"Unknown card {password}.",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return card_id


async def _save_and_respond(
    session: AsyncSession,
    storage_key: str,
    deck: EditableDeck,
    catalog: CardCatalog,
    applied: int,
) -> ApiResponse[ChangeResponse]:
    encoded = await store_deck(session, storage_key, deck, catalog)
    state = build_state(storage_key, deck, catalog, encoded)
    return ApiResponse.success(ChangeResponse(applied=applied, state=state))


def _applied(message: DeckMessage | None) -> int:
    return 0 if message is None else message.amount


# --- Endpoints ---


@router.get("/{storage_key}", response_model=ApiResponse[DeckStateResponse])
async def get_deck(
    storage_key: StorageKey,
    session: SessionDep,
    catalog: CatalogDep,
) -> ApiResponse[DeckStateResponse]:
    """
    Get the deck stored under a key.

    Missing or unreadable state yields an empty deck.
    """
    deck = await load_deck(session, storage_key, catalog)
    state = build_state(storage_key, deck, catalog, deck.encode(catalog))
    return ApiResponse.success(state)


@router.post("/{storage_key}/increment", response_model=ApiResponse[ChangeResponse])
async def increment_card(
    storage_key: StorageKey,
    request: ChangeRequest,
    session: SessionDep,
    catalog: CatalogDep,
) -> ApiResponse[ChangeResponse]:
    """Add copies of a card. Counts saturate; `applied` reports the actual change."""
    card_id = resolve_card(request.password, catalog)
    deck = await load_deck(session, storage_key, catalog)
    applied = deck.increment(card_id, request.part_type, request.amount)
    return await _save_and_respond(session, storage_key, deck, catalog, applied)


@router.post("/{storage_key}/decrement", response_model=ApiResponse[ChangeResponse])
async def decrement_card(
    storage_key: StorageKey,
    request: ChangeRequest,
    session: SessionDep,
    catalog: CatalogDep,
) -> ApiResponse[ChangeResponse]:
    """Remove copies of a card. Counts stop at zero; `applied` reports the actual change."""
    card_id = resolve_card(request.password, catalog)
    deck = await load_deck(session, storage_key, catalog)
    applied = deck.decrement(card_id, request.part_type, request.amount)
    return await _save_and_respond(session, storage_key, deck, catalog, applied)


@router.post("/{storage_key}/undo", response_model=ApiResponse[ChangeResponse])
async def undo(
    storage_key: StorageKey,
    session: SessionDep,
    catalog: CatalogDep,
) -> ApiResponse[ChangeResponse]:
    """Revert the most recent change. A no-op if there is nothing to undo."""
    deck = await load_deck(session, storage_key, catalog)
    message = deck.undo()
    return await _save_and_respond(session, storage_key, deck, catalog, _applied(message))


@router.post("/{storage_key}/redo", response_model=ApiResponse[ChangeResponse])
async def redo(
    storage_key: StorageKey,
    session: SessionDep,
    catalog: CatalogDep,
) -> ApiResponse[ChangeResponse]:
    """Re-apply the most recently undone change. A no-op if there is nothing to redo."""
    deck = await load_deck(session, storage_key, catalog)
    message = deck.redo()
    return await _save_and_respond(session, storage_key, deck, catalog, _applied(message))


@router.post("/{storage_key}/new", response_model=ApiResponse[ChangeResponse])
async def new_deck(
    storage_key: StorageKey,
    session: SessionDep,
    catalog: CatalogDep,
) -> ApiResponse[ChangeResponse]:
    """Replace the deck with an empty one, without history."""
    return await _save_and_respond(session, storage_key, EditableDeck(), catalog, 0)


@router.post("/{storage_key}/import", response_model=ApiResponse[ChangeResponse])
async def import_ydk(
    storage_key: StorageKey,
    request: ImportRequest,
    session: SessionDep,
    catalog: CatalogDep,
) -> ApiResponse[ChangeResponse]:
    """
    Replace the deck with the contents of a YDK document.

    The imported deck starts without history. Any error (malformed file,
    unknown card) aborts the import and leaves the stored deck untouched.
    """
    deck = ydk.load(request.ydk, catalog)
    return await _save_and_respond(session, storage_key, deck, catalog, 0)


@router.get("/{storage_key}/export")
async def export_ydk(
    storage_key: StorageKey,
    session: SessionDep,
    catalog: CatalogDep,
) -> Response:
    """Download the deck as a .ydk file."""
    deck = await load_deck(session, storage_key, catalog)
    return Response(
        content=ydk.dumps(deck, catalog),
        media_type=YDK_MIME_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{YDK_FILE_NAME}"'},
    )


@router.delete("/{storage_key}")
async def delete_deck(
    storage_key: StorageKey,
    session: SessionDep,
) -> dict[str, str]:
    """Forget the deck stored under a key."""
    deleted = await clear_deck(session, storage_key)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"No deck stored under {storage_key!r}")
    return {"status": "deleted", "storage_key": storage_key}
