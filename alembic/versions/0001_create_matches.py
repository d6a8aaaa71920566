"""Create matches table.

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Adds:
  matches — one row per match_id fetched with HTTP 200.
    matchId is the primary key; a second insert of the same id fails with
    a constraint error, which the crawler treats as "already recorded".
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "matches",
        sa.Column("matchId", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("httpStatusCode", sa.Integer(), nullable=True),
        sa.Column("rawJson", sa.Text(), nullable=True),
        sa.Column("errorMessage", sa.Text(), nullable=True),
        sa.Column("private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notFound", sa.Boolean(), nullable=False, server_default=sa.false()),
    )


def downgrade() -> None:
    op.drop_table("matches")
