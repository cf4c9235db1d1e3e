import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ygodeck.models.card import Card, CardLimit, CardType, MonsterType, SpellType, TrapType
from ygodeck.models.catalog import CardCatalog
from ygodeck.models.db import Base


@pytest.fixture
def cards() -> list[Card]:
    """
    Sample card list. Catalog ids are list positions:

    0 Dark Magician, 1 Blue-Eyes White Dragon, 2 Ash Blossom & Joyous Spring,
    3 Pot of Greed, 4 Mystical Space Typhoon, 5 Mirror Force,
    6 Stardust Dragon, 7 Decode Talker
    """
    return [
        Card(
            name="Dark Magician",
            password=46986414,
            card_type=CardType.monster(level=7, is_effect=False),
            aliases=(36996508,),
            archetype="Dark Magician",
        ),
        Card(
            name="Blue-Eyes White Dragon",
            password=89631139,
            card_type=CardType.monster(level=8, is_effect=False),
            aliases=(89631140,),
            archetype="Blue-Eyes",
        ),
        Card(
            name="Ash Blossom & Joyous Spring",
            password=14558127,
            card_type=CardType.monster(level=3),
        ),
        Card(
            name="Pot of Greed",
            password=55144522,
            card_type=CardType.spell(),
            limit=CardLimit.BANNED,
        ),
        Card(
            name="Mystical Space Typhoon",
            password=5318639,
            card_type=CardType.spell(SpellType.QUICK_PLAY),
        ),
        Card(
            name="Mirror Force",
            password=44095762,
            card_type=CardType.trap(TrapType.NORMAL),
        ),
        Card(
            name="Stardust Dragon",
            password=44508094,
            card_type=CardType.monster(MonsterType.SYNCHRO, level=8),
        ),
        Card(
            name="Decode Talker",
            password=1861629,
            card_type=CardType.link(3),
            archetype="Code Talker",
        ),
    ]


@pytest.fixture
def catalog(cards: list[Card]) -> CardCatalog:
    return CardCatalog(cards)


@pytest.fixture
def numbered_catalog() -> CardCatalog:
    """Catalog of three Main deck monsters with passwords 1, 23 and 456."""
    return CardCatalog(
        Card(name=f"Monster {password}", password=password, card_type=CardType.monster())
        for password in (1, 23, 456)
    )


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
