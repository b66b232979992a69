"""create_votes_table

Create the polymorphic vote ledger:
- voter and votable are (type, id) pairs
- direction is +1 (up) or -1 (down)
- one vote per voter per votable

Revision ID: 5c1d0e8f2a47
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "5c1d0e8f2a47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("voter_type", sa.String(length=255), nullable=False),
        sa.Column("voter_id", sa.String(length=255), nullable=False),
        sa.Column("votable_type", sa.String(length=255), nullable=False),
        sa.Column("votable_id", sa.String(length=255), nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.CheckConstraint("direction IN (1, -1)", name="ck_votes_direction"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "voter_type",
            "voter_id",
            "votable_type",
            "votable_id",
            name="uq_votes_voter_votable",
        ),
    )
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])
    op.create_index("idx_votes_created_at", "votes", ["created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_votes_created_at", table_name="votes")
    op.drop_index("idx_votes_votable", table_name="votes")
    op.drop_table("votes")
