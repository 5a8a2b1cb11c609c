"""
States API Backend — FactSheet SQLAlchemy Model
================================================

What:  ORM model for the `fact_sheets` table: one document per state code
       holding that state's ordered fun facts.
Who:   Used by FactStore for reads and upserts, and by Alembic for migrations.

Table Design:
    - state_code: natural primary key (two upper-case letters). It references
      the in-memory catalog, so there is no database foreign key.
    - facts: JSON array of strings; insertion order is significant and
      duplicates are allowed. JSONB on PostgreSQL.
    - updated_at: last write time (UTC), informational only.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from states_api.database import Base

FactList = JSON().with_variant(JSONB(), "postgresql")


class FactSheet(Base):
    """
    Mutable fun-fact document for one state.

    Lifecycle:
        1. Absent until the first successful fact insertion for the state
        2. Appended to, edited and shortened by the fact service
        3. Never deleted as a whole (an emptied list stays as `[]`)

    `facts` is always reassigned (never mutated in place) so SQLAlchemy
    detects the change on the JSON column.
    """

    __tablename__ = "fact_sheets"

    state_code: Mapped[str] = mapped_column(
        String(2),
        primary_key=True,
        comment="Two-letter state code from the reference catalog",
    )

    facts: Mapped[List[str]] = mapped_column(
        FactList,
        nullable=False,
        default=list,
        comment="Ordered fun facts for the state",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        comment="Last time the fact list was written (UTC)",
    )

    def __repr__(self) -> str:
        return f"<FactSheet(state_code='{self.state_code}', facts={len(self.facts or [])})>"
