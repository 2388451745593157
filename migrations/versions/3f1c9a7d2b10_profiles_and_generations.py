"""profiles (tier + daily quota) and generations (history)

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:12:44.104221
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '3f1c9a7d2b10'
down_revision = None
branch_labels = None
depends_on = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    op.create_table(
        'profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('tier', sa.String(length=16), nullable=False, server_default='free'),
        sa.Column('generations_today', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_generation_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('profiles', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_profiles_user_id'), ['user_id'], unique=True)
        batch_op.create_index(batch_op.f('ix_profiles_tier'), ['tier'], unique=False)

    op.create_table(
        'generations',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('original_content', sa.Text(), nullable=False),
        sa.Column('tone', sa.String(length=64), nullable=False),
        sa.Column('platforms', JSONType, nullable=False),
        sa.Column('results', JSONType, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('generations', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_generations_user_id'), ['user_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_generations_created_at'), ['created_at'], unique=False)
        batch_op.create_index('idx_generations_user_created', ['user_id', 'created_at'], unique=False)


def downgrade():
    with op.batch_alter_table('generations', schema=None) as batch_op:
        batch_op.drop_index('idx_generations_user_created')
        batch_op.drop_index(batch_op.f('ix_generations_created_at'))
        batch_op.drop_index(batch_op.f('ix_generations_user_id'))
    op.drop_table('generations')

    with op.batch_alter_table('profiles', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_profiles_tier'))
        batch_op.drop_index(batch_op.f('ix_profiles_user_id'))
    op.drop_table('profiles')
