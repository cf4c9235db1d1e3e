"""
Card catalog records.

A Card is one entry of the card catalog. The catalog assigns every card an
internal Id; the card itself carries the external passwords (the numbers
printed on physical cards and used by YDK files).

Only the classification needed by the deck core is modelled here:
the card kind, the monster subtype that decides Extra deck placement,
and the fields used for display ordering.
"""

from dataclasses import dataclass, field
from enum import Enum

# Type used for passwords. Eight-digit numbers, always fit in an unsigned 32-bit int.
CardPassword = int

MAX_PASSWORD = 2**32 - 1


class CardKind(str, Enum):
    """Top-level card classification."""

    MONSTER = "monster"
    SPELL = "spell"
    TRAP = "trap"


class MonsterType(str, Enum):
    """Summoning subtype of a non-Link monster."""

    FUSION = "fusion"
    RITUAL = "ritual"
    SYNCHRO = "synchro"
    XYZ = "xyz"


class SpellType(str, Enum):
    NORMAL = "normal"
    FIELD = "field"
    EQUIP = "equip"
    CONTINUOUS = "continuous"
    QUICK_PLAY = "quick_play"
    RITUAL = "ritual"


class TrapType(str, Enum):
    NORMAL = "normal"
    CONTINUOUS = "continuous"
    COUNTER = "counter"


class CardLimit(str, Enum):
    """Forbidden & Limited list status."""

    UNLIMITED = "unlimited"
    SEMI_LIMITED = "semi_limited"
    LIMITED = "limited"
    BANNED = "banned"

    def count(self) -> int:
        """Maximum copies allowed across Main, Extra and Side deck."""
        return _LIMIT_COUNTS[self]


_LIMIT_COUNTS: dict[CardLimit, int] = {
    CardLimit.UNLIMITED: 3,
    CardLimit.SEMI_LIMITED: 2,
    CardLimit.LIMITED: 1,
    CardLimit.BANNED: 0,
}


@dataclass(frozen=True, slots=True)
class CardType:
    """
    Card type classification.

    Attributes:
        kind: Monster, spell or trap
        monster_type: Fusion/Ritual/Synchro/Xyz for such monsters, None otherwise
        is_link: True for Link monsters (monster_type is always None for these)
        is_effect: False for Normal (vanilla) monsters
        level: Level or rank, or the link value for Link monsters
        pendulum_scale: Scale for Pendulum monsters, None otherwise
        spell_type: Subtype of spell cards
        trap_type: Subtype of trap cards
    """

    kind: CardKind
    monster_type: MonsterType | None = None
    is_link: bool = False
    is_effect: bool = True
    level: int = 0
    pendulum_scale: int | None = None
    spell_type: SpellType | None = None
    trap_type: TrapType | None = None

    @classmethod
    def monster(
        cls,
        monster_type: MonsterType | None = None,
        *,
        level: int = 4,
        is_effect: bool = True,
        pendulum_scale: int | None = None,
    ) -> "CardType":
        return cls(
            kind=CardKind.MONSTER,
            monster_type=monster_type,
            is_effect=is_effect,
            level=level,
            pendulum_scale=pendulum_scale,
        )

    @classmethod
    def link(cls, link_value: int, *, is_effect: bool = True) -> "CardType":
        return cls(kind=CardKind.MONSTER, is_link=True, is_effect=is_effect, level=link_value)

    @classmethod
    def spell(cls, spell_type: SpellType = SpellType.NORMAL) -> "CardType":
        return cls(kind=CardKind.SPELL, is_effect=False, spell_type=spell_type)

    @classmethod
    def trap(cls, trap_type: TrapType = TrapType.NORMAL) -> "CardType":
        return cls(kind=CardKind.TRAP, is_effect=False, trap_type=trap_type)

    @property
    def is_monster(self) -> bool:
        return self.kind is CardKind.MONSTER

    @property
    def is_normal(self) -> bool:
        """Normal (vanilla) monster without an effect."""
        return self.is_monster and not self.is_effect

    @property
    def is_pendulum(self) -> bool:
        return self.is_monster and self.pendulum_scale is not None

    def is_extra_deck_monster(self) -> bool:
        """Fusion, Synchro, Xyz and Link monsters live in the Extra deck."""
        if not self.is_monster:
            return False
        return self.is_link or self.monster_type in _EXTRA_DECK_TYPES


_EXTRA_DECK_TYPES = frozenset({MonsterType.FUSION, MonsterType.SYNCHRO, MonsterType.XYZ})


@dataclass(frozen=True, slots=True)
class Card:
    """
    A single card catalog entry.

    Attributes:
        name: Card name
        password: Primary password, written to YDK files and encoded decks
        card_type: Type classification
        limit: Forbidden & Limited status
        aliases: Alternate passwords (other printings/artworks) of the same card
        archetype: Archetype name, if any
        description: Card text
    """

    name: str
    password: CardPassword
    card_type: CardType
    limit: CardLimit = CardLimit.UNLIMITED
    aliases: tuple[CardPassword, ...] = field(default_factory=tuple)
    archetype: str | None = None
    description: str = ""

    @property
    def all_passwords(self) -> tuple[CardPassword, ...]:
        """Primary password followed by all aliases."""
        return (self.password, *self.aliases)
