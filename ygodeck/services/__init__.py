"""
Deck services.

Catalog loading, display ordering and deck state persistence.
"""

from ygodeck.services.catalog_store import (
    CatalogFormatError,
    decode_catalog,
    encode_catalog,
    get_catalog,
    load_catalog,
    load_cards_json,
    read_catalog_file,
    write_catalog_file,
)
from ygodeck.services.deck_order import deck_order_key, type_indices
from ygodeck.services.deck_storage import (
    clear_deck,
    decode_or_default,
    load_deck,
    store_deck,
)

__all__ = [
    "CatalogFormatError",
    "clear_deck",
    "deck_order_key",
    "decode_catalog",
    "decode_or_default",
    "encode_catalog",
    "get_catalog",
    "load_cards_json",
    "load_catalog",
    "load_deck",
    "read_catalog_file",
    "store_deck",
    "type_indices",
    "write_catalog_file",
]
