"""SQLAlchemy table definitions for the vote ledger.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    MetaData,
    SmallInteger,
    String,
    Table,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

VOTE_KEY_CONSTRAINT = "uq_votes_voter_votable"

# ============================================================================
# VOTES TABLE (polymorphic voter and votable)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    Column("voter_type", String(255), nullable=False),
    Column("voter_id", String(255), nullable=False),
    Column("votable_type", String(255), nullable=False),
    Column("votable_id", String(255), nullable=False),
    Column("direction", SmallInteger, nullable=False),  # 1 = up, -1 = down
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=text("NOW()"),
    ),
    CheckConstraint("direction IN (1, -1)", name="ck_votes_direction"),
    UniqueConstraint(
        "voter_type",
        "voter_id",
        "votable_type",
        "votable_id",
        name=VOTE_KEY_CONSTRAINT,
    ),
)

# The unique constraint covers lookups by voter; votable lookups need their own
Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)
Index("idx_votes_created_at", votes_table.c.created_at)
