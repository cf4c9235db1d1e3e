"""
Linear undo/redo history.

The log keeps every recorded action, oldest first, and an offset counting
how many of the most recent actions are currently undone. The log never
touches the state it describes: undo() hands out the inverted action and
redo() the original one, and the owner applies them.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, Protocol, Self, TypeVar

from ygodeck.models.text_encoding import (
    ENTRY_SEPARATOR,
    HISTORY_SEPARATOR,
    parse_unsigned,
)

if TYPE_CHECKING:
    from ygodeck.models.catalog import CardCatalog


class Invertible(Protocol):
    """An action that can be reverted by applying its inverse."""

    def invert(self) -> Self: ...


class EncodableMessage(Invertible, Protocol):
    def encode(self, catalog: "CardCatalog") -> str: ...

    @classmethod
    def decode(cls, text: str, catalog: "CardCatalog") -> Self | None: ...


T = TypeVar("T", bound=Invertible)
M = TypeVar("M", bound=EncodableMessage)


@dataclass
class UndoRedo(Generic[T]):
    """
    Undo/redo log over invertible actions.

    Attributes:
        entries: Recorded actions, oldest first
        offset: Number of trailing entries that are currently undone
    """

    entries: list[T] = field(default_factory=list)
    offset: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.offset <= len(self.entries):
            raise ValueError(f"offset {self.offset} outside 0..{len(self.entries)}")

    @property
    def can_undo(self) -> bool:
        return self.offset < len(self.entries)

    @property
    def can_redo(self) -> bool:
        return self.offset > 0

    def push_action(self, action: T) -> None:
        """Record a new action. Anything undone so far can no longer be redone."""
        if self.offset > 0:
            del self.entries[len(self.entries) - self.offset :]
            self.offset = 0

        self.entries.append(action)

    def undo(self) -> T | None:
        """Step back: returns the inverse of the most recent active action."""
        if not self.can_undo:
            return None

        action = self.entries[len(self.entries) - 1 - self.offset]
        self.offset += 1
        return action.invert()

    def redo(self) -> T | None:
        """Step forward: returns the most recently undone action as recorded."""
        if not self.can_redo:
            return None

        self.offset -= 1
        return self.entries[len(self.entries) - 1 - self.offset]

    def encode(self: "UndoRedo[M]", catalog: "CardCatalog") -> str:
        """Encode as "{offset};{comma-joined entries}"."""
        encoded = ENTRY_SEPARATOR.join(entry.encode(catalog) for entry in self.entries)
        return f"{self.offset}{HISTORY_SEPARATOR}{encoded}"

    @classmethod
    def decode(
        cls,
        text: str,
        catalog: "CardCatalog",
        message_type: type[M],
    ) -> "UndoRedo[M] | None":
        offset_text, separator, entries_text = text.partition(HISTORY_SEPARATOR)
        if not separator:
            return None

        offset = parse_unsigned(offset_text, maximum=2**63 - 1)
        if offset is None:
            return None

        entries: list[M] = []
        if entries_text:
            for part in entries_text.split(ENTRY_SEPARATOR):
                message = message_type.decode(part, catalog)
                if message is None:
                    return None
                entries.append(message)

        if offset > len(entries):
            return None

        return UndoRedo(entries=entries, offset=offset)
