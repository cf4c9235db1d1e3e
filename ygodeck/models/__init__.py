from ygodeck.models.card import (
    Card,
    CardKind,
    CardLimit,
    CardPassword,
    CardType,
    MonsterType,
    SpellType,
    TrapType,
)
from ygodeck.models.catalog import CardCatalog, Id
from ygodeck.models.deck import Deck, DeckEntry, PartType
from ygodeck.models.deck_part import DeckPart, entries_for_part, part_totals
from ygodeck.models.editable_deck import DeckMessage, EditableDeck, MessageKind
from ygodeck.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
)
from ygodeck.models.text_encoding import TextEncoding
from ygodeck.models.undo_redo import UndoRedo

__all__ = [
    "ApiResponse",
    "Card",
    "CardCatalog",
    "CardKind",
    "CardLimit",
    "CardPassword",
    "CardType",
    "Deck",
    "DeckEntry",
    "DeckMessage",
    "DeckPart",
    "EditableDeck",
    "FailureDetail",
    "FailureKind",
    "Id",
    "KnownError",
    "MessageKind",
    "MonsterType",
    "OutcomeType",
    "PartType",
    "SpellType",
    "TextEncoding",
    "TrapType",
    "UndoRedo",
    "entries_for_part",
    "part_totals",
]
