"""Pytest configuration and shared fixtures.

Adds the `src/` directory to `sys.path` so tests can import the `dominion`
package without requiring an editable install in CI, and provides a
file-backed SQLite database per test plus protocol fakes for the
calculators.
"""

import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from sqlalchemy import create_engine  # noqa: E402

from dominion.calculators import LandCalculator  # noqa: E402
from dominion.database import create_session_factory  # noqa: E402
from dominion.factory import Calculators  # noqa: E402
from dominion.models import Base, Dominion, Race, Realm, Round  # noqa: E402

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


class FakeProduction:
    """Returns fixed deltas per resource."""

    def __init__(self):
        self.deltas = dict.fromkeys(
            ("platinum", "food", "lumber", "mana", "ore", "gems", "boats"), 0
        )

    def get_platinum_production(self, dominion):  # noqa: ARG002
        return self.deltas["platinum"]

    def get_food_net_change(self, dominion):  # noqa: ARG002
        return self.deltas["food"]

    def get_lumber_net_change(self, dominion):  # noqa: ARG002
        return self.deltas["lumber"]

    def get_mana_net_change(self, dominion):  # noqa: ARG002
        return self.deltas["mana"]

    def get_ore_production(self, dominion):  # noqa: ARG002
        return self.deltas["ore"]

    def get_gem_production(self, dominion):  # noqa: ARG002
        return self.deltas["gems"]

    def get_boat_production(self, dominion):  # noqa: ARG002
        return self.deltas["boats"]


class FakePopulation:
    def __init__(self):
        self.peasant_growth = 0
        self.draftee_growth = 0

    def get_population_peasant_growth(self, dominion):  # noqa: ARG002
        return self.peasant_growth

    def get_population_draftee_growth(self, dominion):  # noqa: ARG002
        return self.draftee_growth


class FakeCasualties:
    """Returns ``casualties`` and records the food level it was asked at."""

    def __init__(self):
        self.casualties: dict[str, int] = {}
        self.calls: list[int] = []

    def get_starvation_casualties_by_unit_type(self, dominion):
        self.calls.append(dominion.resource_food)
        return dict(self.casualties)


class FakeSpells:
    """Records which dominions had their spells force-refreshed."""

    def __init__(self):
        self.refreshed: list[int] = []

    def get_active_spells(self, dominion, force_refresh=False):
        if force_refresh:
            self.refreshed.append(dominion.id)
        return []

    def is_spell_active(self, dominion, spell):  # noqa: ARG002
        return False


class FakeNetworth:
    """Networth per dominion id, falling back to 20 per acre."""

    def __init__(self):
        self.values: dict[int, int] = {}
        self._land = LandCalculator()

    def get_dominion_networth(self, dominion):
        if dominion.id in self.values:
            return self.values[dominion.id]
        return self._land.get_total_land(dominion) * 20


@pytest.fixture
def calculators():
    """Calculator bundle of fakes; the land calculator is the real one."""
    return Calculators(
        land=LandCalculator(),
        networth=FakeNetworth(),
        production=FakeProduction(),
        population=FakePopulation(),
        casualties=FakeCasualties(),
        spells=FakeSpells(),
    )


@pytest.fixture
def engine(tmp_path):
    """Create a file-backed SQLite database so separate sessions share data."""
    engine = create_engine(f"sqlite:///{tmp_path / 'dominion-test.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def session(session_factory):
    """Create database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def race(session):
    race = Race(name="Human")
    session.add(race)
    session.commit()
    return race


@pytest.fixture
def active_round(session):
    """A round that is active at ``NOW``."""
    round_ = Round(
        number=1,
        name="Round One",
        start_date=NOW - timedelta(days=10),
        end_date=NOW + timedelta(days=40),
    )
    session.add(round_)
    session.commit()
    return round_


@pytest.fixture
def realm(session, active_round):
    realm = Realm(round_id=active_round.id, number=1, name="The Commonwealth")
    session.add(realm)
    session.commit()
    return realm


def make_dominion(session, round_, realm, race, **fields) -> Dominion:
    """Persist a dominion with zeroed land and buildings unless overridden."""
    values = {f"land_{land}": 0 for land in Dominion.LAND_TYPES}
    values.update({f"building_{building}": 0 for building in Dominion.BUILDING_TYPES})
    values.update(
        {
            "round_id": round_.id,
            "realm_id": realm.id,
            "race_id": race.id,
            "name": f"Dominion {fields.get('name', '')}".strip(),
        }
    )
    values.update(fields)
    dominion = Dominion(**values)
    session.add(dominion)
    session.commit()
    return dominion


@pytest.fixture
def dominion(session, active_round, realm, race):
    return make_dominion(session, active_round, realm, race, name="Ardenne")


@pytest.fixture
def dominion_factory(session, active_round, realm, race):
    """Create dominions in the active round's realm."""

    def factory(**fields) -> Dominion:
        return make_dominion(session, active_round, realm, race, **fields)

    return factory


@pytest.fixture
def now():
    return NOW
