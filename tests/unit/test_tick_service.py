"""Unit tests for the hourly and daily tick orchestration."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from dominion.factory import create_tick_service
from dominion.models import (
    ConstructionQueue,
    DailyRanking,
    Dominion,
    DominionHistory,
    ExplorationQueue,
    Realm,
    Round,
    TrainingQueue,
)


@pytest.fixture
def tick(session, calculators, now):
    return create_tick_service(session, calculators, now=now, chunk_size=10)


def _reload(session, dominion):
    session.commit()
    session.expire_all()
    return session.get(Dominion, dominion.id)


class TestTickDominion:
    def test_queue_arrivals_are_added(self, session, tick, dominion):
        session.add_all(
            [
                ExplorationQueue(dominion_id=dominion.id, land_type="plain", amount=10, hours=1),
                ExplorationQueue(dominion_id=dominion.id, land_type="hill", amount=4, hours=6),
                ConstructionQueue(dominion_id=dominion.id, building="farm", amount=4, hours=1),
                TrainingQueue(dominion_id=dominion.id, unit_type="unit1", amount=5, hours=1),
            ]
        )
        session.commit()

        tick.tick_dominion(dominion)
        dominion = _reload(session, dominion)

        assert dominion.land_plain == 10
        assert dominion.land_hill == 0
        assert dominion.building_farm == 4
        assert dominion.military_unit1 == 5

    def test_spells_are_force_refreshed(self, tick, dominion, calculators):
        tick.tick_dominion(dominion)

        assert calculators.spells.refreshed == [dominion.id]

    def test_production_deltas_are_applied(self, session, tick, dominion, calculators):
        calculators.production.deltas.update(
            platinum=250, food=-100, lumber=30, mana=40, ore=12, gems=7, boats=1
        )

        tick.tick_dominion(dominion)
        dominion = _reload(session, dominion)

        assert dominion.resource_platinum == 100250
        assert dominion.resource_food == 14900
        assert dominion.resource_lumber == 15030
        assert dominion.resource_mana == 40
        assert dominion.resource_ore == 12
        assert dominion.resource_gems == 10007
        assert dominion.resource_boats == 1

    def test_stockpiles_are_floored_at_zero(self, session, tick, dominion_factory, calculators):
        dominion = dominion_factory(
            resource_platinum=10,
            resource_lumber=0,
            resource_mana=3,
            resource_ore=1,
            resource_gems=2,
            resource_boats=0,
        )
        calculators.production.deltas.update(
            platinum=-20, lumber=-7, mana=-5, ore=-4, gems=-9, boats=-1
        )

        tick.tick_dominion(dominion)
        dominion = _reload(session, dominion)

        for resource in ("platinum", "lumber", "mana", "ore", "gems", "boats"):
            assert getattr(dominion, f"resource_{resource}") == 0

    def test_food_shortfall_reaches_casualties_before_clamp(
        self, session, tick, dominion_factory, calculators
    ):
        dominion = dominion_factory(resource_food=2, resource_mana=1)
        calculators.production.deltas.update(food=-12, mana=-3)

        tick.tick_dominion(dominion)

        assert calculators.casualties.calls == [-10]
        assert dominion.resource_food == 0
        assert dominion.resource_mana == 0

    def test_starvation_kills_units_and_clamps_food(
        self, session, tick, dominion_factory, calculators
    ):
        dominion = dominion_factory(resource_food=5, military_unit1=10)
        calculators.production.deltas["food"] = -15
        calculators.casualties.casualties = {"military_unit1": 3}

        tick.tick_dominion(dominion)
        dominion = _reload(session, dominion)

        assert calculators.casualties.calls == [-10]
        assert dominion.military_unit1 == 7
        assert dominion.resource_food == 0

    def test_no_starvation_without_negative_food(self, session, tick, dominion, calculators):
        calculators.casualties.casualties = {"military_unit1": 3}

        tick.tick_dominion(dominion)

        assert calculators.casualties.calls == []

    def test_population_growth(self, session, tick, dominion, calculators):
        calculators.population.peasant_growth = 30
        calculators.population.draftee_growth = 4

        tick.tick_dominion(dominion)
        dominion = _reload(session, dominion)

        assert dominion.peasants == 1330
        assert dominion.peasants_last_hour == 30
        assert dominion.military_draftees == 104

    def test_peasants_last_hour_is_overwritten(self, session, tick, dominion_factory):
        dominion = dominion_factory(peasants_last_hour=55)

        tick.tick_dominion(dominion)
        dominion = _reload(session, dominion)

        assert dominion.peasants_last_hour == 0

    @pytest.mark.parametrize(
        ("morale", "expected"),
        [(0, 6), (50, 56), (69, 75), (70, 73), (98, 100), (100, 100)],
    )
    def test_morale_regeneration(self, session, tick, dominion_factory, morale, expected):
        dominion = dominion_factory(morale=morale)

        tick.tick_dominion(dominion)

        assert dominion.morale == expected

    @pytest.mark.parametrize(("strength", "expected"), [(0, 4), (90, 94), (98, 100), (100, 100)])
    def test_strength_regeneration(self, session, tick, dominion_factory, strength, expected):
        dominion = dominion_factory(spy_strength=strength, wizard_strength=strength)

        tick.tick_dominion(dominion)

        assert dominion.spy_strength == expected
        assert dominion.wizard_strength == expected

    def test_history_row_records_the_delta(self, session, tick, dominion, calculators):
        calculators.production.deltas["platinum"] = 100
        calculators.population.peasant_growth = 20

        tick.tick_dominion(dominion)
        session.commit()

        history = session.execute(
            select(DominionHistory).where(DominionHistory.dominion_id == dominion.id)
        ).scalar_one()
        assert history.event == "tick"
        assert history.delta["resource_platinum"] == 100
        assert history.delta["peasants"] == 20
        assert history.delta["peasants_last_hour"] == 20
        assert "resource_food" not in history.delta
        assert "updated_at" not in history.delta

    def test_unknown_casualty_attribute_raises(self, session, tick, dominion_factory, calculators):
        dominion = dominion_factory(resource_food=0)
        calculators.production.deltas["food"] = -1
        calculators.casualties.casualties = {"military_unit9": 1}

        with pytest.raises(ValueError, match="military_unit9"):
            tick.tick_dominion(dominion)
        session.rollback()

    @pytest.mark.parametrize(
        ("method", "name"),
        [
            (Dominion.land_attribute, "lava"),
            (Dominion.building_attribute, "castle"),
            (Dominion.unit_attribute, "unit5"),
        ],
    )
    def test_unknown_item_types_raise(self, method, name):
        with pytest.raises(ValueError, match=name):
            method(name)


def _ended_round_dominion(session, race, now):
    ended = Round(
        number=99,
        name="Old Round",
        start_date=now - timedelta(days=60),
        end_date=now - timedelta(days=10),
    )
    session.add(ended)
    session.flush()
    realm = Realm(round_id=ended.id, number=1, name="Old Realm")
    session.add(realm)
    session.flush()
    dominion = Dominion(
        round_id=ended.id, realm_id=realm.id, race_id=race.id, name="Ghost", morale=50
    )
    session.add(dominion)
    session.commit()
    return ended, dominion


class TestTickHourly:
    def test_only_active_rounds_are_ticked(
        self, session, tick, active_round, dominion_factory, race, now
    ):
        first = dominion_factory(name="First", morale=50)
        second = dominion_factory(name="Second", morale=50)
        _, ghost = _ended_round_dominion(session, race, now)

        result = tick.tick_hourly()
        session.commit()

        assert result.rounds == [active_round.id]
        assert result.dominions == 2
        assert first.morale == 56
        assert second.morale == 56
        session.refresh(ghost)
        assert ghost.morale == 50

    def test_round_boundaries(self, session, tick, active_round, now):
        assert [r.id for r in tick.get_active_rounds()] == [active_round.id]

        active_round.start_date = now
        session.commit()
        assert [r.id for r in tick.get_active_rounds()] == [active_round.id]

        active_round.end_date = now
        active_round.start_date = now - timedelta(days=1)
        session.commit()
        assert tick.get_active_rounds() == []

    def test_one_history_row_per_dominion(self, session, tick, dominion_factory):
        dominion_factory(name="First")
        dominion_factory(name="Second")

        tick.tick_hourly()
        session.commit()

        rows = session.execute(select(DominionHistory.dominion_id)).scalars().all()
        assert len(rows) == 2


class TestTickDaily:
    def test_daily_flags_are_reset(self, session, tick, dominion_factory):
        dominion = dominion_factory(daily_platinum=True, daily_land=True)

        tick.tick_daily()
        dominion = _reload(session, dominion)

        assert dominion.daily_platinum is False
        assert dominion.daily_land is False

    def test_daily_writes_no_history(self, session, tick, dominion_factory):
        dominion_factory(daily_platinum=True)

        tick.tick_daily()
        session.commit()

        assert session.execute(select(DominionHistory)).scalars().all() == []

    def test_rankings_are_refreshed(self, session, tick, active_round, dominion_factory):
        small = dominion_factory(name="Small", land_plain=50)
        large = dominion_factory(name="Large", land_plain=120)

        result = tick.tick_daily()
        session.commit()

        assert result.rounds == [active_round.id]
        assert result.dominions == 2
        rankings = {
            ranking.dominion_id: ranking
            for ranking in session.execute(select(DailyRanking)).scalars()
        }
        assert rankings[large.id].land_rank == 1
        assert rankings[small.id].land_rank == 2
        assert rankings[small.id].land == 50
        assert rankings[large.id].networth == 2400

    def test_inactive_rounds_are_skipped(self, session, tick, race, now):
        _, ghost = _ended_round_dominion(session, race, now)
        ghost.daily_land = True
        session.commit()

        result = tick.tick_daily()
        session.commit()

        assert result.rounds == []
        assert result.dominions == 0
        session.refresh(ghost)
        assert ghost.daily_land is True
        assert session.execute(select(DailyRanking)).scalars().all() == []
