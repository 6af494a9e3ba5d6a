"""create player_record and user_score

Revision ID: 5c2e9a7d41b0
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e9a7d41b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'player_record' not in existing_tables:
        op.create_table(
            'player_record',
            sa.Column('id', sa.String(length=32), primary_key=True),
            sa.Column('name', sa.String(length=128), nullable=False),
            sa.Column('score', sa.Float(), nullable=True),
            sa.Column('timestamp', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_player_record_score', 'player_record', ['score'])
        op.create_index('ix_player_record_timestamp', 'player_record', ['timestamp'])

    if 'user_score' not in existing_tables:
        op.create_table(
            'user_score',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.String(length=128), nullable=False),
            sa.Column('screen1_score', sa.Float(), nullable=True),
            sa.Column('screen2_score', sa.Float(), nullable=True),
        )
        op.create_index('ix_user_score_user_id', 'user_score', ['user_id'], unique=True)


def downgrade():
    op.drop_index('ix_user_score_user_id', table_name='user_score')
    op.drop_table('user_score')
    op.drop_index('ix_player_record_timestamp', table_name='player_record')
    op.drop_index('ix_player_record_score', table_name='player_record')
    op.drop_table('player_record')
