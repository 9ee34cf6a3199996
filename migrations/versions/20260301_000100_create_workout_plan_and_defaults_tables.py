"""create users, workout plan tree and defaults tables

Revision ID: 20260301_000100
Revises:
Create Date: 2026-03-01 00:01:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20260301_000100'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('hashed_password', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'workout_plans',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'type', name='uq_workout_plans_user_type'),
    )
    op.create_index('ix_workout_plans_id', 'workout_plans', ['id'])
    op.create_index('ix_workout_plans_user_id', 'workout_plans', ['user_id'])

    op.create_table(
        'workout_weeks',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('plan_id', sa.String(length=36), sa.ForeignKey('workout_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('plan_id', 'week_number', name='uq_workout_weeks_plan_week_number'),
        sa.CheckConstraint('week_number >= 1', name='check_week_number_positive'),
    )
    op.create_index('ix_workout_weeks_id', 'workout_weeks', ['id'])
    op.create_index('ix_workout_weeks_plan_id', 'workout_weeks', ['plan_id'])

    op.create_table(
        'workout_days',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('week_id', sa.String(length=36), sa.ForeignKey('workout_weeks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('weekday', sa.Integer(), nullable=False),
        sa.Column('storage_zone', sa.String(length=1), nullable=False),
        sa.Column('weather', sa.String(length=100), nullable=True),
        sa.Column('feeling_status', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('weekday BETWEEN 1 AND 7', name='check_weekday_range'),
    )
    op.create_index('ix_workout_days_id', 'workout_days', ['id'])
    op.create_index('ix_workout_days_week_id', 'workout_days', ['week_id'])

    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('day_id', sa.String(length=36), sa.ForeignKey('workout_days.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_number', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('code', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('day_id', 'session_number', name='uq_workout_sessions_day_session_number'),
        sa.CheckConstraint('session_number BETWEEN 1 AND 3', name='check_session_number_range'),
    )
    op.create_index('ix_workout_sessions_id', 'workout_sessions', ['id'])
    op.create_index('ix_workout_sessions_day_id', 'workout_sessions', ['day_id'])

    op.create_table(
        'moveframes',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('workout_id', sa.String(length=36), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=10), nullable=False),
        sa.Column('sport', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('workout_id', 'position', name='uq_moveframes_workout_position'),
    )
    op.create_index('ix_moveframes_id', 'moveframes', ['id'])
    op.create_index('ix_moveframes_workout_id', 'moveframes', ['workout_id'])

    op.create_table(
        'movelaps',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('moveframe_id', sa.String(length=36), sa.ForeignKey('moveframes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('index', sa.Integer(), nullable=False),
        sa.Column('distance', sa.Float(), nullable=True),
        sa.Column('speed_code', sa.String(length=10), nullable=True),
        sa.Column('time', sa.String(length=20), nullable=True),
        sa.Column('pause', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_movelaps_id', 'movelaps', ['id'])
    op.create_index('ix_movelaps_moveframe_id', 'movelaps', ['moveframe_id'])

    for table in ('color_defaults', 'favourites_defaults', 'tools_defaults'):
        op.create_table(
            table,
            sa.Column('id', sa.String(length=36), primary_key=True),
            sa.Column('language', sa.String(length=16), nullable=False),
            sa.Column('data', sa.JSON(), nullable=False),
            *_timestamps(),
        )
        op.create_index(f'ix_{table}_id', table, ['id'])
        op.create_index(f'ix_{table}_language', table, ['language'], unique=True)


def downgrade():
    for table in ('tools_defaults', 'favourites_defaults', 'color_defaults'):
        op.drop_table(table)
    op.drop_table('movelaps')
    op.drop_table('moveframes')
    op.drop_table('workout_sessions')
    op.drop_table('workout_days')
    op.drop_table('workout_weeks')
    op.drop_table('workout_plans')
    op.drop_table('users')
