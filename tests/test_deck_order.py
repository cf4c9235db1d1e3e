from ygodeck.models.card import Card, CardType, MonsterType, SpellType, TrapType
from ygodeck.models.catalog import CardCatalog
from ygodeck.services.deck_order import deck_order_key, type_indices


def names(cards: list[Card]) -> list[str]:
    return [card.name for card in sorted(cards, key=deck_order_key)]


class TestDeckOrder:
    def test_sample_catalog_order(self, catalog: CardCatalog) -> None:
        assert names(list(catalog.cards())) == [
            "Blue-Eyes White Dragon",
            "Dark Magician",
            "Ash Blossom & Joyous Spring",
            "Stardust Dragon",
            "Decode Talker",
            "Mystical Space Typhoon",
            "Pot of Greed",
            "Mirror Force",
        ]

    def test_monster_subtypes(self) -> None:
        cards = [
            Card(name="Xyz", password=1, card_type=CardType.monster(MonsterType.XYZ)),
            Card(name="Link", password=2, card_type=CardType.link(2)),
            Card(name="Fusion", password=3, card_type=CardType.monster(MonsterType.FUSION)),
            Card(name="Plain", password=4, card_type=CardType.monster()),
            Card(name="Synchro", password=5, card_type=CardType.monster(MonsterType.SYNCHRO)),
            Card(name="Ritual", password=6, card_type=CardType.monster(MonsterType.RITUAL)),
        ]

        assert names(cards) == ["Plain", "Ritual", "Fusion", "Synchro", "Xyz", "Link"]

    def test_spell_subtypes(self) -> None:
        cards = [
            Card(name=spell_type.value, password=index, card_type=CardType.spell(spell_type))
            for index, spell_type in enumerate(SpellType)
        ]

        assert names(cards) == ["field", "ritual", "continuous", "equip", "quick_play", "normal"]

    def test_trap_subtypes(self) -> None:
        cards = [
            Card(name=trap_type.value, password=index, card_type=CardType.trap(trap_type))
            for index, trap_type in enumerate(TrapType)
        ]

        assert names(cards) == ["continuous", "counter", "normal"]

    def test_higher_level_first(self) -> None:
        cards = [
            Card(name="Low", password=1, card_type=CardType.monster(level=2)),
            Card(name="High", password=2, card_type=CardType.monster(level=8)),
        ]

        assert names(cards) == ["High", "Low"]

    def test_non_pendulum_before_pendulum(self) -> None:
        cards = [
            Card(name="Pendulum", password=1, card_type=CardType.monster(pendulum_scale=4)),
            Card(name="Regular", password=2, card_type=CardType.monster()),
        ]

        assert names(cards) == ["Regular", "Pendulum"]

    def test_ties_break_on_name(self) -> None:
        cards = [
            Card(name="Torrential Tribute", password=1, card_type=CardType.trap()),
            Card(name="Bottomless Trap Hole", password=2, card_type=CardType.trap()),
        ]

        assert names(cards) == ["Bottomless Trap Hole", "Torrential Tribute"]

    def test_type_indices(self) -> None:
        assert type_indices(CardType.trap(TrapType.COUNTER)) == [0, 1]
        assert type_indices(CardType.spell(SpellType.FIELD)) == [1, 5]
        assert type_indices(CardType.link(4)) == [2, 0, 4]
        assert type_indices(CardType.monster(level=4, is_effect=False)) == [3, 1, 4, 1, 4]
