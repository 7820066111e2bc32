"""Add normalized_name and identity constraint to participants

Revision ID: 002_add_normalized_name
Revises: 001_initial
Create Date: 2026-10-19

Existing rows keep normalized_name NULL until the duplicate merge
(POST /api/v1/migrate/latvian-duplicates or `noskrien.cli merge-db`)
assigns it.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002_add_normalized_name'
down_revision: Union[str, None] = '001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table('participants') as batch_op:
        batch_op.add_column(sa.Column('normalized_name', sa.String(200), nullable=True))
        batch_op.create_unique_constraint(
            'uq_participants_identity',
            ['normalized_name', 'distance', 'gender'],
        )


def downgrade() -> None:
    with op.batch_alter_table('participants') as batch_op:
        batch_op.drop_constraint('uq_participants_identity', type_='unique')
        batch_op.drop_column('normalized_name')
