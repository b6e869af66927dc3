"""Dominion model.

A dominion is one player's persistent state within a round: land, buildings,
military, resources, population and the bounded morale/strength scalars the
hourly tick regenerates.
"""

from typing import TYPE_CHECKING, ClassVar

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .history import DominionHistory
    from .queue import ActiveSpell
    from .round import Race, Realm, Round

LAND_TYPES: tuple[str, ...] = (
    "plain",
    "mountain",
    "swamp",
    "cavern",
    "forest",
    "hill",
    "water",
)

BUILDING_TYPES: tuple[str, ...] = (
    "home",
    "alchemy",
    "farm",
    "smithy",
    "masonry",
    "ore_mine",
    "gryphon_nest",
    "tower",
    "wizard_guild",
    "temple",
    "diamond_mine",
    "school",
    "lumberyard",
    "forest_haven",
    "factory",
    "guard_tower",
    "shrine",
    "barracks",
    "dock",
)

UNIT_TYPES: tuple[str, ...] = (
    "draftees",
    "unit1",
    "unit2",
    "unit3",
    "unit4",
    "spies",
    "wizards",
    "archmages",
)

RESOURCE_TYPES: tuple[str, ...] = (
    "platinum",
    "food",
    "lumber",
    "mana",
    "ore",
    "gems",
    "tech",
    "boats",
)

MAX_STRENGTH = 100


def _counter(default: int = 0) -> Mapped[int]:
    return mapped_column(Integer, nullable=False, default=default)


class Dominion(Base, TimestampMixin):
    """Represents a player's dominion within a round.

    Attributes:
        id: Primary key
        round_id: Round the dominion plays in
        realm_id: Realm the dominion belongs to
        race_id: Race of the dominion
        name: Dominion name (unique per round)
        ruler_name: Display name of the ruler
        peasants: Peasant population
        peasants_last_hour: Peasant growth applied by the most recent tick
        morale: Morale percentage (0-100)
        spy_strength: Spy strength percentage (0-100)
        wizard_strength: Wizard strength percentage (0-100)
        daily_platinum: Whether the daily platinum bonus was claimed today
        daily_land: Whether the daily land bonus was claimed today
        resource_*: Resource stockpiles
        military_*: Unit counts, draftees included
        land_*: Acres per land type
        building_*: Constructed buildings per building type
    """

    __tablename__ = "dominions"

    LAND_TYPES: ClassVar[tuple[str, ...]] = LAND_TYPES
    BUILDING_TYPES: ClassVar[tuple[str, ...]] = BUILDING_TYPES
    UNIT_TYPES: ClassVar[tuple[str, ...]] = UNIT_TYPES

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Foreign keys
    round_id: Mapped[int] = mapped_column(Integer, ForeignKey("rounds.id"), nullable=False)
    realm_id: Mapped[int] = mapped_column(Integer, ForeignKey("realms.id"), nullable=False)
    race_id: Mapped[int] = mapped_column(Integer, ForeignKey("races.id"), nullable=False)

    name: Mapped[str] = mapped_column(String, nullable=False)
    ruler_name: Mapped[str] = mapped_column(String, nullable=False, default="")

    # Population
    peasants: Mapped[int] = _counter(1300)
    peasants_last_hour: Mapped[int] = _counter()

    # Bounded scalars
    morale: Mapped[int] = _counter(100)
    spy_strength: Mapped[int] = _counter(100)
    wizard_strength: Mapped[int] = _counter(100)

    # Daily limits
    daily_platinum: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    daily_land: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Resources
    resource_platinum: Mapped[int] = _counter(100000)
    resource_food: Mapped[int] = _counter(15000)
    resource_lumber: Mapped[int] = _counter(15000)
    resource_mana: Mapped[int] = _counter()
    resource_ore: Mapped[int] = _counter()
    resource_gems: Mapped[int] = _counter(10000)
    resource_tech: Mapped[int] = _counter()
    resource_boats: Mapped[int] = _counter()

    # Military
    military_draftees: Mapped[int] = _counter(100)
    military_unit1: Mapped[int] = _counter()
    military_unit2: Mapped[int] = _counter(150)
    military_unit3: Mapped[int] = _counter()
    military_unit4: Mapped[int] = _counter()
    military_spies: Mapped[int] = _counter(25)
    military_wizards: Mapped[int] = _counter(25)
    military_archmages: Mapped[int] = _counter()

    # Land
    land_plain: Mapped[int] = _counter(40)
    land_mountain: Mapped[int] = _counter(20)
    land_swamp: Mapped[int] = _counter(20)
    land_cavern: Mapped[int] = _counter(20)
    land_forest: Mapped[int] = _counter(20)
    land_hill: Mapped[int] = _counter(20)
    land_water: Mapped[int] = _counter(20)

    # Buildings
    building_home: Mapped[int] = _counter()
    building_alchemy: Mapped[int] = _counter()
    building_farm: Mapped[int] = _counter(10)
    building_smithy: Mapped[int] = _counter()
    building_masonry: Mapped[int] = _counter()
    building_ore_mine: Mapped[int] = _counter()
    building_gryphon_nest: Mapped[int] = _counter()
    building_tower: Mapped[int] = _counter(10)
    building_wizard_guild: Mapped[int] = _counter()
    building_temple: Mapped[int] = _counter()
    building_diamond_mine: Mapped[int] = _counter(10)
    building_school: Mapped[int] = _counter()
    building_lumberyard: Mapped[int] = _counter(10)
    building_forest_haven: Mapped[int] = _counter()
    building_factory: Mapped[int] = _counter()
    building_guard_tower: Mapped[int] = _counter()
    building_shrine: Mapped[int] = _counter()
    building_barracks: Mapped[int] = _counter()
    building_dock: Mapped[int] = _counter(10)

    # Relationships
    round: Mapped["Round"] = relationship("Round", back_populates="dominions")
    realm: Mapped["Realm"] = relationship("Realm", back_populates="dominions")
    race: Mapped["Race"] = relationship("Race")
    active_spells: Mapped[list["ActiveSpell"]] = relationship(
        "ActiveSpell",
        foreign_keys="ActiveSpell.dominion_id",
        order_by="ActiveSpell.spell",
        viewonly=True,
    )
    history: Mapped[list["DominionHistory"]] = relationship(
        "DominionHistory", back_populates="dominion", order_by="DominionHistory.id"
    )

    __table_args__ = (
        CheckConstraint("morale BETWEEN 0 AND 100", name="ck_dominions_morale"),
        CheckConstraint("spy_strength BETWEEN 0 AND 100", name="ck_dominions_spy_strength"),
        CheckConstraint(
            "wizard_strength BETWEEN 0 AND 100", name="ck_dominions_wizard_strength"
        ),
        CheckConstraint("resource_food >= 0", name="ck_dominions_resource_food"),
        Index("idx_dominions_round", "round_id"),
        Index("idx_dominions_realm", "realm_id"),
    )

    @staticmethod
    def land_attribute(land_type: str) -> str:
        if land_type not in LAND_TYPES:
            raise ValueError(f"Unknown land type: {land_type}")
        return f"land_{land_type}"

    @staticmethod
    def building_attribute(building: str) -> str:
        if building not in BUILDING_TYPES:
            raise ValueError(f"Unknown building type: {building}")
        return f"building_{building}"

    @staticmethod
    def unit_attribute(unit_type: str) -> str:
        if unit_type not in UNIT_TYPES:
            raise ValueError(f"Unknown unit type: {unit_type}")
        return f"military_{unit_type}"

    @staticmethod
    def population_attribute(attribute: str) -> str:
        """Validate an attribute name used as a casualty target."""
        if attribute == "peasants" or attribute in {f"military_{u}" for u in UNIT_TYPES}:
            return attribute
        raise ValueError(f"Unknown population attribute: {attribute}")

    def __repr__(self) -> str:
        return f"<Dominion(id={self.id}, name='{self.name}', round_id={self.round_id})>"
