"""Initial migration - participants and races

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'participants',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('distance', sa.String(20), nullable=False),
        sa.Column('gender', sa.String(1), nullable=False),
        sa.Column('season', sa.String(9), nullable=True),
        sa.Column('link', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_participants_name', 'participants', ['name'])

    op.create_table(
        'races',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'participant_id',
            sa.Integer(),
            sa.ForeignKey('participants.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('result', sa.String(20), nullable=False),
        sa.Column('km', sa.String(10), nullable=False),
        sa.Column('location', sa.String(200), nullable=False),
        sa.Column('season', sa.String(9), nullable=True),
    )
    op.create_index('ix_races_participant_date', 'races', ['participant_id', 'date'])


def downgrade() -> None:
    op.drop_index('ix_races_participant_date', table_name='races')
    op.drop_table('races')
    op.drop_index('ix_participants_name', table_name='participants')
    op.drop_table('participants')
