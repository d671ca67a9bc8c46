"""create training log schema

Revision ID: 4b1f0c9e2a7d
Revises:
Create Date: 2026-10-19 15:58:12.413907

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

CATEGORIES = ("strength", "cardio", "zone2", "pilates", "mobility", "plyometrics", "stretching", "other")

# enum types are created/dropped explicitly; columns only reference them
exercise_category = postgresql.ENUM(*CATEGORIES, name="exercise_category", create_type=False)
weight_unit = postgresql.ENUM("lb", "kg", name="weight_unit", create_type=False)
category_col = sa.Enum(*CATEGORIES, name="exercise_category").with_variant(exercise_category, "postgresql")
unit_col = sa.Enum("lb", "kg", name="weight_unit").with_variant(weight_unit, "postgresql")


# revision identifiers, used by Alembic.
revision: str = '4b1f0c9e2a7d'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        exercise_category.create(bind, checkfirst=True)
        weight_unit.create(bind, checkfirst=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('reset_token', sa.String(length=64), nullable=True),
        sa.Column('reset_token_expiry', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_reset_token', 'users', ['reset_token'])

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True, index=True),
        sa.Column('name', sa.String(length=200), nullable=False, index=True),
        sa.Column('category', category_col, nullable=False, index=True),
        sa.Column('muscles', sa.JSON(), nullable=False),
        sa.Column('equipment', sa.JSON(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=False, server_default=''),
        sa.Column('youtube_id', sa.String(length=32), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    op.create_table(
        'session_templates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('category', category_col, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    op.create_table(
        'template_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('session_templates.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('default_sets', sa.Integer(), nullable=True),
        sa.Column('default_reps', sa.Integer(), nullable=True),
        sa.Column('default_weight', sa.Numeric(10, 2), nullable=True),
        sa.Column('default_duration_sec', sa.Integer(), nullable=True),
    )

    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('category', category_col, nullable=False),
        sa.Column('date', sa.Date(), nullable=False, index=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('session_templates.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    op.create_table(
        'session_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
    )

    op.create_table(
        'set_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_exercise_id', sa.Integer(), sa.ForeignKey('session_exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('set_index', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('weight', sa.Numeric(10, 2), nullable=True),
        sa.Column('unit', unit_col, nullable=False, server_default='lb'),
        sa.Column('duration_sec', sa.Integer(), nullable=True),
        sa.Column('distance_meters', sa.Integer(), nullable=True),
        sa.Column('rpe', sa.Integer(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.UniqueConstraint('session_exercise_id', 'set_index', name='uq_set_logs_session_exercise_set_index'),
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('set_logs')
    op.drop_table('session_exercises')
    op.drop_table('sessions')
    op.drop_table('template_exercises')
    op.drop_table('session_templates')
    op.drop_table('exercises')
    op.drop_index('ix_users_reset_token', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')

    # finally drop enum types
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        weight_unit.drop(bind, checkfirst=True)
        exercise_category.drop(bind, checkfirst=True)
