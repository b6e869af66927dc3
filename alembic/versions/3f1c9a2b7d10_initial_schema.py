"""Initial schema: rounds, dominions, queues, rankings, history

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-16 09:12:44.218305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LAND_TYPES = ('plain', 'mountain', 'swamp', 'cavern', 'forest', 'hill', 'water')
BUILDING_TYPES = (
    'home', 'alchemy', 'farm', 'smithy', 'masonry', 'ore_mine', 'gryphon_nest', 'tower',
    'wizard_guild', 'temple', 'diamond_mine', 'school', 'lumberyard', 'forest_haven',
    'factory', 'guard_tower', 'shrine', 'barracks', 'dock',
)
UNIT_TYPES = ('draftees', 'unit1', 'unit2', 'unit3', 'unit4', 'spies', 'wizards', 'archmages')
RESOURCE_TYPES = ('platinum', 'food', 'lumber', 'mana', 'ore', 'gems', 'tech', 'boats')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _counter(name):
    return sa.Column(name, sa.Integer(), nullable=False)


def _in_clause(column, values):
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


def _queue_table(name, item_column, values):
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('dominion_id', sa.Integer(), nullable=False),
        sa.Column(item_column, sa.String(), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('hours', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['dominion_id'], ['dominions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dominion_id', item_column, 'hours', name=f'uq_{name}'),
        sa.CheckConstraint(_in_clause(item_column, values), name=f'ck_{name}_type'),
    )
    op.create_index(f'idx_{name}_dominion', name, ['dominion_id'])


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'rounds',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('number'),
        sa.CheckConstraint('start_date < end_date', name='ck_rounds_window'),
    )
    op.create_table(
        'races',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_table(
        'realms',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('round_id', sa.Integer(), nullable=False),
        sa.Column('number', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['round_id'], ['rounds.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('round_id', 'number', name='uq_realms_round_number'),
    )
    op.create_index('idx_realms_round', 'realms', ['round_id'])

    op.create_table(
        'dominions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('round_id', sa.Integer(), nullable=False),
        sa.Column('realm_id', sa.Integer(), nullable=False),
        sa.Column('race_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('ruler_name', sa.String(), nullable=False),
        _counter('peasants'),
        _counter('peasants_last_hour'),
        _counter('morale'),
        _counter('spy_strength'),
        _counter('wizard_strength'),
        sa.Column('daily_platinum', sa.Boolean(), nullable=False),
        sa.Column('daily_land', sa.Boolean(), nullable=False),
        *[_counter(f'resource_{resource}') for resource in RESOURCE_TYPES],
        *[_counter(f'military_{unit}') for unit in UNIT_TYPES],
        *[_counter(f'land_{land}') for land in LAND_TYPES],
        *[_counter(f'building_{building}') for building in BUILDING_TYPES],
        *_timestamps(),
        sa.ForeignKeyConstraint(['round_id'], ['rounds.id']),
        sa.ForeignKeyConstraint(['realm_id'], ['realms.id']),
        sa.ForeignKeyConstraint(['race_id'], ['races.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('morale BETWEEN 0 AND 100', name='ck_dominions_morale'),
        sa.CheckConstraint('spy_strength BETWEEN 0 AND 100', name='ck_dominions_spy_strength'),
        sa.CheckConstraint('wizard_strength BETWEEN 0 AND 100', name='ck_dominions_wizard_strength'),
        sa.CheckConstraint('resource_food >= 0', name='ck_dominions_resource_food'),
    )
    op.create_index('idx_dominions_round', 'dominions', ['round_id'])
    op.create_index('idx_dominions_realm', 'dominions', ['realm_id'])

    _queue_table('queue_exploration', 'land_type', LAND_TYPES)
    _queue_table('queue_construction', 'building', BUILDING_TYPES)
    _queue_table('queue_training', 'unit_type', UNIT_TYPES)

    op.create_table(
        'active_spells',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('dominion_id', sa.Integer(), nullable=False),
        sa.Column('spell', sa.String(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('cast_by_dominion_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['dominion_id'], ['dominions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['cast_by_dominion_id'], ['dominions.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('dominion_id', 'spell', 'duration', name='uq_active_spells'),
    )
    op.create_index('idx_active_spells_dominion', 'active_spells', ['dominion_id'])

    op.create_table(
        'daily_rankings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('round_id', sa.Integer(), nullable=False),
        sa.Column('dominion_id', sa.Integer(), nullable=False),
        sa.Column('dominion_name', sa.String(), nullable=False),
        sa.Column('race_name', sa.String(), nullable=False),
        sa.Column('realm_number', sa.Integer(), nullable=False),
        sa.Column('realm_name', sa.String(), nullable=False),
        sa.Column('land', sa.Integer(), nullable=False),
        sa.Column('land_rank', sa.Integer(), nullable=True),
        sa.Column('land_rank_change', sa.Integer(), nullable=True),
        sa.Column('networth', sa.Integer(), nullable=False),
        sa.Column('networth_rank', sa.Integer(), nullable=True),
        sa.Column('networth_rank_change', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['round_id'], ['rounds.id']),
        sa.ForeignKeyConstraint(['dominion_id'], ['dominions.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('round_id', 'dominion_id', name='uq_daily_rankings_round_dominion'),
    )
    op.create_index('idx_daily_rankings_round_land', 'daily_rankings', ['round_id', 'land'])
    op.create_index('idx_daily_rankings_round_networth', 'daily_rankings', ['round_id', 'networth'])

    op.create_table(
        'dominion_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('dominion_id', sa.Integer(), nullable=False),
        sa.Column('event', sa.String(), nullable=False),
        sa.Column('delta', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['dominion_id'], ['dominions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint("event IN ('tick')", name='ck_dominion_history_event'),
    )
    op.create_index('idx_dominion_history_dominion', 'dominion_history', ['dominion_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_dominion_history_dominion', table_name='dominion_history')
    op.drop_table('dominion_history')
    op.drop_index('idx_daily_rankings_round_networth', table_name='daily_rankings')
    op.drop_index('idx_daily_rankings_round_land', table_name='daily_rankings')
    op.drop_table('daily_rankings')
    op.drop_index('idx_active_spells_dominion', table_name='active_spells')
    op.drop_table('active_spells')
    for name in ('queue_training', 'queue_construction', 'queue_exploration'):
        op.drop_index(f'idx_{name}_dominion', table_name=name)
        op.drop_table(name)
    op.drop_index('idx_dominions_realm', table_name='dominions')
    op.drop_index('idx_dominions_round', table_name='dominions')
    op.drop_table('dominions')
    op.drop_index('idx_realms_round', table_name='realms')
    op.drop_table('realms')
    op.drop_table('races')
    op.drop_table('rounds')
