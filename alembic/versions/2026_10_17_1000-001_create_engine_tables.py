"""Create training-load engine tables

Revision ID: 001
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
    ]


def upgrade() -> None:
    """Create benchmark, zone, progression, ride, trend and settings tables."""
    op.create_table('benchmark_records', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('ftp_watts', sa.Integer(), nullable=False),
        sa.Column('lthr_bpm', sa.Integer(), nullable=True),
        sa.Column('test_date', sa.Date(), nullable=False),
        sa.Column('test_method', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('source_activity_id', sa.Integer(), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('is_current', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_benchmark_records_athlete_id'), 'benchmark_records', ['athlete_id'])
    op.create_index('ix_benchmark_athlete_test_date', 'benchmark_records', ['athlete_id', 'test_date'])
    op.create_index('uq_benchmark_one_current_per_athlete', 'benchmark_records', ['athlete_id'], unique=True,
                    postgresql_where=sa.text('is_current'), sqlite_where=sa.text('is_current = 1'))

    op.create_table('training_zones', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('zone_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('zone_number', sa.Integer(), nullable=False),
        sa.Column('power_min', sa.Integer(), nullable=False),
        sa.Column('power_max', sa.Integer(), nullable=False),
        sa.Column('hr_min', sa.Integer(), nullable=True),
        sa.Column('hr_max', sa.Integer(), nullable=True),
        sa.Column('ftp_percent_min', sa.Integer(), nullable=False),
        sa.Column('ftp_percent_max', sa.Integer(), nullable=False),
        sa.Column('lthr_percent_min', sa.Integer(), nullable=False),
        sa.Column('lthr_percent_max', sa.Integer(), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('athlete_id', 'zone_name', name='uq_training_zone_athlete_zone'))
    op.create_index(op.f('ix_training_zones_athlete_id'), 'training_zones', ['athlete_id'])

    op.create_table('progression_levels', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('zone', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('level', sa.Float(), nullable=False, server_default='3.0'),
        sa.Column('workouts_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_workout_date', sa.Date(), nullable=True),
        sa.Column('last_level_change', sa.Float(), nullable=True),
        sa.Column('last_level_change_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('athlete_id', 'zone', name='uq_progression_athlete_zone'),
        sa.CheckConstraint('level >= 1.0 AND level <= 10.0', name='ck_progression_level_range'))
    op.create_index(op.f('ix_progression_levels_athlete_id'), 'progression_levels', ['athlete_id'])

    op.create_table('progression_level_history', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('zone', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('old_level', sa.Float(), nullable=False),
        sa.Column('new_level', sa.Float(), nullable=False),
        sa.Column('level_change', sa.Float(), nullable=False),
        sa.Column('reason', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('source_activity_id', sa.Integer(), nullable=True),
        sa.Column('planned_workout_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_progression_level_history_athlete_id'), 'progression_level_history', ['athlete_id'])
    op.create_index('ix_progression_history_athlete_zone_created', 'progression_level_history',
                    ['athlete_id', 'zone', 'created_at'])

    op.create_table('ride_summaries', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('duration_seconds', sa.Integer(), nullable=False),
        sa.Column('average_power', sa.Float(), nullable=True),
        sa.Column('normalized_power', sa.Float(), nullable=True),
        sa.Column('peak_20min_power', sa.Float(), nullable=True),
        sa.Column('elevation_gain_m', sa.Float(), nullable=False, server_default='0'),
        sa.Column('workout_category', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('zone', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('tss', sa.Integer(), nullable=True),
        sa.Column('tss_method', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column('source_activity_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_ride_summaries_athlete_id'), 'ride_summaries', ['athlete_id'])
    op.create_index('ix_ride_summaries_athlete_recorded', 'ride_summaries', ['athlete_id', 'recorded_at'])

    op.create_table('performance_trends', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('trend_type', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('zone', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('direction', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('value_change', sa.Float(), nullable=False, server_default='0'),
        sa.Column('value_change_percent', sa.Float(), nullable=True),
        sa.Column('sample_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('metrics', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('confidence >= 0 AND confidence <= 1', name='ck_performance_trend_confidence'))
    op.create_index(op.f('ix_performance_trends_athlete_id'), 'performance_trends', ['athlete_id'])
    op.create_index('ix_performance_trends_athlete_active', 'performance_trends',
                    ['athlete_id', 'trend_type', 'is_active'])

    op.create_table('adaptation_settings', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sa.Integer(), nullable=False),
        sa.Column('adaptive_enabled', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('auto_apply', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('sensitivity', sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False,
                  server_default='moderate'),
        sa.Column('min_days_before_workout', sa.Integer(), nullable=False, server_default='2'),
        sa.Column('tsb_fatigued_threshold', sa.Float(), nullable=False, server_default='-30.0'),
        sa.Column('tsb_fresh_threshold', sa.Float(), nullable=False, server_default='5.0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_adaptation_settings_athlete_id'), 'adaptation_settings', ['athlete_id'], unique=True)


def downgrade() -> None:
    """Drop the engine tables."""
    op.drop_index(op.f('ix_adaptation_settings_athlete_id'), table_name='adaptation_settings')
    op.drop_table('adaptation_settings')
    op.drop_index('ix_performance_trends_athlete_active', table_name='performance_trends')
    op.drop_index(op.f('ix_performance_trends_athlete_id'), table_name='performance_trends')
    op.drop_table('performance_trends')
    op.drop_index('ix_ride_summaries_athlete_recorded', table_name='ride_summaries')
    op.drop_index(op.f('ix_ride_summaries_athlete_id'), table_name='ride_summaries')
    op.drop_table('ride_summaries')
    op.drop_index('ix_progression_history_athlete_zone_created', table_name='progression_level_history')
    op.drop_index(op.f('ix_progression_level_history_athlete_id'), table_name='progression_level_history')
    op.drop_table('progression_level_history')
    op.drop_index(op.f('ix_progression_levels_athlete_id'), table_name='progression_levels')
    op.drop_table('progression_levels')
    op.drop_index(op.f('ix_training_zones_athlete_id'), table_name='training_zones')
    op.drop_table('training_zones')
    op.drop_index('uq_benchmark_one_current_per_athlete', table_name='benchmark_records')
    op.drop_index('ix_benchmark_athlete_test_date', table_name='benchmark_records')
    op.drop_index(op.f('ix_benchmark_records_athlete_id'), table_name='benchmark_records')
    op.drop_table('benchmark_records')
