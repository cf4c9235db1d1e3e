from ygodeck.db.database import get_session, init_db
from ygodeck.db.operations import delete_saved_deck, get_saved_deck, save_deck_text

__all__ = [
    "delete_saved_deck",
    "get_saved_deck",
    "get_session",
    "init_db",
    "save_deck_text",
]
