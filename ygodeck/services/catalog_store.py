"""
Card catalog storage.

The catalog is distributed as one binary file (`cards.bin.xz`): the card
list serialized with fixed-width little-endian integers, optionally xz
compressed. Layout:

    catalog  := u64 card_count, card*
    card     := str name, u32 password, seq<u32> aliases, card_type,
                u32 limit, option<str> archetype, str description
    card_type:= u32 kind, option<u32> monster_type, bool is_link,
                bool is_effect, u8 level, option<u8> pendulum_scale,
                option<u32> spell_type, option<u32> trap_type
    str      := u64 byte_length, UTF-8 bytes
    seq<T>   := u64 length, T*
    option<T>:= u8 tag (0 = absent, 1 = present), T if present
    bool     := u8 (0 or 1)
    enums    := u32 index of the member in declaration order

Trailing bytes after the last card are ignored.

Card lists can also be read from JSON (a list of card objects), which is
how catalogs are authored before packing.
"""

import json
import logging
import lzma
import struct
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, Field, ValidationError

from ygodeck.config import settings
from ygodeck.models.card import (
    MAX_PASSWORD,
    Card,
    CardKind,
    CardLimit,
    CardType,
    MonsterType,
    SpellType,
    TrapType,
)
from ygodeck.models.catalog import CardCatalog

logger = logging.getLogger(__name__)

XZ_SUFFIX = ".xz"

E = TypeVar("E", bound=Enum)


class CatalogFormatError(ValueError):
    """Raised when catalog data is truncated or malformed."""


# --- Binary encoding ---


class _Writer:
    def __init__(self) -> None:
        self._buffer = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def _pack(self, fmt: str, value: int) -> None:
        try:
            self._buffer += struct.pack(fmt, value)
        except struct.error as e:
            raise CatalogFormatError(f"value {value!r} does not fit {fmt!r}: {e}") from e

    def u8(self, value: int) -> None:
        self._pack("<B", value)

    def u32(self, value: int) -> None:
        self._pack("<I", value)

    def u64(self, value: int) -> None:
        self._pack("<Q", value)

    def boolean(self, value: bool) -> None:
        self.u8(1 if value else 0)

    def string(self, value: str) -> None:
        data = value.encode("utf-8")
        self.u64(len(data))
        self._buffer += data

    def enum(self, value: Enum) -> None:
        self.u32(list(type(value)).index(value))


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    def _unpack(self, fmt: str) -> int:
        size = struct.calcsize(fmt)
        if self._pos + size > len(self._data):
            raise CatalogFormatError(f"unexpected end of data at byte {self._pos}")
        (value,) = struct.unpack_from(fmt, self._data, self._pos)
        self._pos += size
        return int(value)

    def u8(self) -> int:
        return self._unpack("<B")

    def u32(self) -> int:
        return self._unpack("<I")

    def u64(self) -> int:
        return self._unpack("<Q")

    def boolean(self) -> bool:
        value = self.u8()
        if value > 1:
            raise CatalogFormatError(f"invalid bool value {value} at byte {self._pos - 1}")
        return value == 1

    def present(self) -> bool:
        """Read an option tag."""
        return self.boolean()

    def string(self) -> str:
        length = self.u64()
        if self._pos + length > len(self._data):
            raise CatalogFormatError(f"string of {length} bytes exceeds data at byte {self._pos}")
        raw = bytes(self._data[self._pos : self._pos + length])
        self._pos += length
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CatalogFormatError(f"invalid UTF-8 string: {e}") from e

    def enum(self, enum_type: type[E]) -> E:
        index = self.u32()
        members = list(enum_type)
        if index >= len(members):
            raise CatalogFormatError(f"invalid {enum_type.__name__} index {index}")
        return members[index]


def _write_card_type(w: _Writer, card_type: CardType) -> None:
    w.enum(card_type.kind)
    _write_optional_enum(w, card_type.monster_type)
    w.boolean(card_type.is_link)
    w.boolean(card_type.is_effect)
    w.u8(card_type.level)
    if card_type.pendulum_scale is None:
        w.u8(0)
    else:
        w.u8(1)
        w.u8(card_type.pendulum_scale)
    _write_optional_enum(w, card_type.spell_type)
    _write_optional_enum(w, card_type.trap_type)


def _write_optional_enum(w: _Writer, value: Enum | None) -> None:
    if value is None:
        w.u8(0)
    else:
        w.u8(1)
        w.enum(value)


def _read_card_type(r: _Reader) -> CardType:
    kind = r.enum(CardKind)
    monster_type = r.enum(MonsterType) if r.present() else None
    is_link = r.boolean()
    is_effect = r.boolean()
    level = r.u8()
    pendulum_scale = r.u8() if r.present() else None
    spell_type = r.enum(SpellType) if r.present() else None
    trap_type = r.enum(TrapType) if r.present() else None
    return CardType(
        kind=kind,
        monster_type=monster_type,
        is_link=is_link,
        is_effect=is_effect,
        level=level,
        pendulum_scale=pendulum_scale,
        spell_type=spell_type,
        trap_type=trap_type,
    )


def encode_catalog(cards: list[Card] | tuple[Card, ...]) -> bytes:
    """
    Serialize a card list to the binary catalog layout (uncompressed).

    Raises:
        CatalogFormatError: If a value does not fit its field width
    """
    w = _Writer()
    w.u64(len(cards))
    for card in cards:
        w.string(card.name)
        w.u32(card.password)
        w.u64(len(card.aliases))
        for alias in card.aliases:
            w.u32(alias)
        _write_card_type(w, card.card_type)
        w.enum(card.limit)
        if card.archetype is None:
            w.u8(0)
        else:
            w.u8(1)
            w.string(card.archetype)
        w.string(card.description)
    return w.getvalue()


def decode_catalog(data: bytes) -> CardCatalog:
    """
    Deserialize a binary catalog (uncompressed).

    Raises:
        CatalogFormatError: If the data is truncated or malformed
    """
    r = _Reader(data)
    count = r.u64()
    cards: list[Card] = []
    for _ in range(count):
        name = r.string()
        password = r.u32()
        aliases = tuple(r.u32() for _ in range(r.u64()))
        card_type = _read_card_type(r)
        limit = r.enum(CardLimit)
        archetype = r.string() if r.present() else None
        description = r.string()
        cards.append(
            Card(
                name=name,
                password=password,
                card_type=card_type,
                limit=limit,
                aliases=aliases,
                archetype=archetype,
                description=description,
            )
        )
    return CardCatalog(cards)


def write_catalog_file(path: Path, cards: list[Card] | tuple[Card, ...]) -> Path:
    """Write a catalog file; a `.xz` suffix selects xz compression."""
    data = encode_catalog(cards)
    if path.suffix == XZ_SUFFIX:
        data = lzma.compress(data, format=lzma.FORMAT_XZ)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def read_catalog_file(path: Path) -> CardCatalog:
    """
    Read a catalog file; a `.xz` suffix means the file is xz compressed.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogFormatError: If the contents are malformed
    """
    data = path.read_bytes()
    if path.suffix == XZ_SUFFIX:
        try:
            data = lzma.decompress(data)
        except lzma.LZMAError as e:
            raise CatalogFormatError(f"invalid xz data: {e}") from e

    catalog = decode_catalog(data)
    logger.info("Loaded %d cards from %s", len(catalog), path)
    return catalog


# --- JSON card lists ---


# Field widths of the binary layout
Byte = Annotated[int, Field(ge=0, le=0xFF)]
Password = Annotated[int, Field(ge=0, le=MAX_PASSWORD)]


class CardTypeRecord(BaseModel):
    """Card type as authored in JSON."""

    kind: CardKind
    monster_type: MonsterType | None = None
    is_link: bool = False
    is_effect: bool = True
    level: Byte = 0
    pendulum_scale: Byte | None = None
    spell_type: SpellType | None = None
    trap_type: TrapType | None = None


class CardRecord(BaseModel):
    """One card as authored in JSON."""

    name: str
    password: Password
    aliases: list[Password] = Field(default_factory=list)
    card_type: CardTypeRecord
    limit: CardLimit = CardLimit.UNLIMITED
    archetype: str | None = None
    description: str = ""

    def to_card(self) -> Card:
        return Card(
            name=self.name,
            password=self.password,
            card_type=CardType(**self.card_type.model_dump()),
            limit=self.limit,
            aliases=tuple(self.aliases),
            archetype=self.archetype,
            description=self.description,
        )


def parse_cards_json(raw: list[dict[str, Any]]) -> list[Card]:
    """
    Validate JSON card objects.

    Raises:
        CatalogFormatError: If any record is invalid
    """
    cards: list[Card] = []
    for index, item in enumerate(raw):
        try:
            cards.append(CardRecord.model_validate(item).to_card())
        except ValidationError as e:
            raise CatalogFormatError(f"invalid card record at index {index}: {e}") from e
    return cards


def load_cards_json(path: Path) -> list[Card]:
    """
    Load a JSON card list from file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogFormatError: If the file is not a valid card list
    """
    with open(path, encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogFormatError(f"invalid JSON: {e}") from e

    if not isinstance(raw, list):
        raise CatalogFormatError("card list must be a JSON array")

    return parse_cards_json(raw)


def load_catalog(path: Path | None = None) -> CardCatalog:
    """
    Load the card catalog from a binary or JSON file.

    Args:
        path: Catalog file. Defaults to settings.catalog_path

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        CatalogFormatError: If the file is malformed
    """
    if path is None:
        path = Path(settings.catalog_path)

    if not path.exists():
        raise FileNotFoundError(
            f"Card catalog not found at {path}. "
            "Run `python -m ygodeck.jobs.pack_catalog` first."
        )

    if path.suffix == ".json":
        return CardCatalog(load_cards_json(path))
    return read_catalog_file(path)


@lru_cache(maxsize=1)
def get_catalog() -> CardCatalog:
    """
    Get the cached card catalog.

    The catalog is an immutable snapshot, loaded once per process.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
    """
    return load_catalog()
