"""
Display order for deck listings.

Cards are ordered the way players sort a physical deck: normal monsters,
effect monsters, spells, traps. Within monsters, main deck monsters come
before Ritual, Fusion, Synchro and Xyz monsters, and Link monsters come last;
higher pendulum scales and levels come first. Spells and traps are grouped by
subtype. Ties are broken by name.

YDK export does not use this order; files are written in id order.
"""

from ygodeck.models.card import Card, CardKind, CardType, MonsterType, SpellType, TrapType

# Higher index sorts first
_SPELL_INDEX: dict[SpellType, int] = {
    SpellType.FIELD: 5,
    SpellType.RITUAL: 4,
    SpellType.CONTINUOUS: 3,
    SpellType.EQUIP: 2,
    SpellType.QUICK_PLAY: 1,
    SpellType.NORMAL: 0,
}

_TRAP_INDEX: dict[TrapType, int] = {
    TrapType.CONTINUOUS: 2,
    TrapType.COUNTER: 1,
    TrapType.NORMAL: 0,
}

_MONSTER_INDEX: dict[MonsterType | None, int] = {
    None: 4,
    MonsterType.RITUAL: 3,
    MonsterType.FUSION: 2,
    MonsterType.SYNCHRO: 1,
    MonsterType.XYZ: 0,
}


def _monster_stats_indices(card_type: CardType) -> list[int]:
    if card_type.is_link:
        return [0, card_type.level]

    indices = [1, _MONSTER_INDEX[card_type.monster_type]]
    if card_type.pendulum_scale is None:
        indices.append(1)
    else:
        indices.extend((0, card_type.pendulum_scale))
    indices.append(card_type.level)
    return indices


def type_indices(card_type: CardType) -> list[int]:
    """Type rank of a card; lexicographically larger ranks sort first."""
    if card_type.is_monster:
        group = 3 if card_type.is_normal else 2
        return [group, *_monster_stats_indices(card_type)]

    if card_type.kind is CardKind.SPELL:
        return [1, _SPELL_INDEX[card_type.spell_type or SpellType.NORMAL]]

    trap_type = card_type.trap_type or TrapType.NORMAL
    return [0, _TRAP_INDEX[trap_type]]


def deck_order_key(card: Card) -> tuple[tuple[int, ...], str]:
    """Sort key for display order, for use with sorted(key=...)."""
    # Rank lists that compare unequal always differ before either one ends,
    # so negating every element reverses the order
    return tuple(-index for index in type_indices(card.card_type)), card.name
