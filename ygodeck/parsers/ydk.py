"""
Reader and writer for the YDK deck format used by YGOPro and YGOPRODeck.

YDK format:
    #main
    89631139
    89631139
    #extra
    !side
    14558127

Grammar (tokens are separated by any run of spaces, tabs or newlines):
    deck    := section+
    section := header id*
    header  := "#main" | "#extra" | "!side"
    id      := unsigned 64-bit decimal integer (a card password)

Sections may repeat; their ids are concatenated in encounter order.
Headers are case-sensitive. Anything else is a parse error.
"""

import io
import logging
import re
from enum import Enum
from pathlib import Path
from typing import TextIO

from ygodeck.models.catalog import CardCatalog, Id
from ygodeck.models.deck import Deck
from ygodeck.models.deck_part import DeckPart, entries_for_part
from ygodeck.models.editable_deck import EditableDeck
from ygodeck.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

# Whitespace as understood by YDK readers: space, tab, CR, LF
TOKEN_PATTERN = re.compile(r"[^ \t\r\n]+")

IDENTIFIER_PATTERN = re.compile(r"[0-9]+")

MAX_IDENTIFIER = 2**64 - 1

YDK_HEADERS: dict[DeckPart, str] = {
    DeckPart.MAIN: "#main",
    DeckPart.EXTRA: "#extra",
    DeckPart.SIDE: "!side",
}

_HEADER_PARTS: dict[str, DeckPart] = {header: part for part, header in YDK_HEADERS.items()}


def ydk_name(part: DeckPart) -> str:
    """Section name in the YDK format."""
    return part.value


def ydk_prefix(part: DeckPart) -> str:
    """Prefix for the section header in the YDK format (`#` or `!`)."""
    return "!" if part is DeckPart.SIDE else "#"


# --- Errors ---


class ParseErrorCode(str, Enum):
    """Why a YDK document was rejected."""

    EXPECTED_HEADER = "expected_header"
    INVALID_IDENTIFIER = "invalid_identifier"
    IDENTIFIER_OUT_OF_RANGE = "identifier_out_of_range"


_CODE_MESSAGES: dict[ParseErrorCode, str] = {
    ParseErrorCode.EXPECTED_HEADER: "expected a section header (#main, #extra or !side)",
    ParseErrorCode.INVALID_IDENTIFIER: "expected a card number or a section header",
    ParseErrorCode.IDENTIFIER_OUT_OF_RANGE: "card number is too large",
}


class YdkError(KnownError):
    """Base class for errors while reading YDK data. Aborts the whole load."""


class YdkReaderError(YdkError):
    """The input could not be read."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            kind=FailureKind.READ_ERROR,
            message="Could not read the deck file.",
            detail=reason,
            suggestion="Check that the file is a plain text .ydk file.",
            status_code=400,
        )


class YdkParseError(YdkError):
    """
    The input violates the YDK grammar.

    Attributes:
        remainder: Unconsumed input, starting at the offending token
        code: Structured reason
    """

    def __init__(self, remainder: str, code: ParseErrorCode):
        self.remainder = remainder
        self.code = code
        near = remainder[:32] if remainder else "end of input"
        super().__init__(
            kind=FailureKind.PARSE_ERROR,
            message=f"Could not parse the deck file: {_CODE_MESSAGES[code]}.",
            detail=f"near {near!r}",
            suggestion="Check that the file is a valid .ydk deck.",
            status_code=422,
        )


class UnknownIdentifierError(YdkError):
    """A card number that the catalog does not know."""

    def __init__(self, identifier: int):
        self.identifier = identifier
        super().__init__(
            kind=FailureKind.UNKNOWN_CARD,
            message=f"Unknown card {identifier}.",
            suggestion="The deck may use cards newer than the card database.",
            status_code=422,
        )


# --- Reading ---


def parse_ydk(text: str) -> dict[DeckPart, list[int]]:
    """
    Parse YDK text into raw identifiers per deck part.

    Args:
        text: Complete YDK document

    Returns:
        Identifiers for Main, Extra and Side in file order (unresolved)

    Raises:
        YdkParseError: On any grammar violation, including empty input
    """
    sections: dict[DeckPart, list[int]] = {part: [] for part in DeckPart.iter()}
    current: DeckPart | None = None

    for match in TOKEN_PATTERN.finditer(text):
        token = match.group()

        part = _HEADER_PARTS.get(token)
        if part is not None:
            current = part
            continue

        remainder = text[match.start() :]
        if current is None:
            raise YdkParseError(remainder, ParseErrorCode.EXPECTED_HEADER)
        if not IDENTIFIER_PATTERN.fullmatch(token):
            raise YdkParseError(remainder, ParseErrorCode.INVALID_IDENTIFIER)

        identifier = int(token)
        if identifier > MAX_IDENTIFIER:
            raise YdkParseError(remainder, ParseErrorCode.IDENTIFIER_OUT_OF_RANGE)

        sections[current].append(identifier)

    # At least one section is required
    if current is None:
        raise YdkParseError("", ParseErrorCode.EXPECTED_HEADER)

    return sections


def load(source: str | TextIO, catalog: CardCatalog) -> EditableDeck:
    """
    Build a deck from YDK data.

    Every identifier is resolved through the catalog's alias table. The first
    unknown identifier aborts the load; no partial deck is ever returned.
    The loaded deck starts with an empty history.

    Args:
        source: YDK text, or a readable text stream
        catalog: Card catalog for identifier resolution

    Raises:
        YdkReaderError: If the stream could not be read
        YdkParseError: If the text is not valid YDK
        UnknownIdentifierError: If an identifier is not in the catalog
    """
    text = source if isinstance(source, str) else _read(source)
    sections = parse_ydk(text)

    resolved: list[tuple[DeckPart, Id]] = []
    for part in DeckPart.iter():
        for identifier in sections[part]:
            card_id = catalog.normalize(identifier)
            if card_id is None:
                logger.warning("YDK import aborted: unknown card %d", identifier)
                raise UnknownIdentifierError(identifier)
            resolved.append((part, card_id))

    deck = EditableDeck()
    for part, card_id in resolved:
        deck.increment(card_id, part.part_type, 1)

    # Imported contents are a fresh baseline, not an action to undo
    deck.reset_history()

    logger.info("Loaded YDK deck: %d cards, %d unique", len(resolved), len(deck.deck))
    return deck


def load_file(path: Path, catalog: CardCatalog) -> EditableDeck:
    """Load a .ydk file from disk. See load()."""
    try:
        with open(path, encoding="utf-8") as f:
            return load(f, catalog)
    except OSError as e:
        raise YdkReaderError(str(e)) from e


def _read(stream: TextIO) -> str:
    try:
        return stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise YdkReaderError(str(e)) from e


# --- Writing ---


def save(deck: Deck | EditableDeck, catalog: CardCatalog, writer: TextIO) -> None:
    """
    Write a deck in YDK format.

    Parts are written in Main, Extra, Side order. Each card is written once
    per copy, by primary password, in ascending id order.

    Raises:
        UnknownIdentifierError: If a deck card is missing from the catalog
        OSError: If the writer fails
    """
    for part in DeckPart.iter():
        writer.write(f"{ydk_prefix(part)}{ydk_name(part)}\n")

        for card_id, count in entries_for_part(deck.entries(), part, catalog):
            card = catalog.get(card_id)
            if card is None:
                raise UnknownIdentifierError(card_id)
            line = f"{card.password}\n"
            for _ in range(count):
                writer.write(line)


def dumps(deck: Deck | EditableDeck, catalog: CardCatalog) -> str:
    """Serialize a deck to a YDK string."""
    buffer = io.StringIO()
    save(deck, catalog, buffer)
    return buffer.getvalue()
