"""Create fact_sheets table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `fact_sheets` table: one row per state code holding that
       state's ordered fun facts as a JSONB array.

Rollback: downgrade() drops the table and every stored fun fact with it.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "fact_sheets",
        sa.Column(
            "state_code",
            sa.String(2),
            nullable=False,
            comment="Two-letter state code from the reference catalog",
        ),
        sa.Column(
            "facts",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
            server_default=sa.text("'[]'"),
            comment="Ordered fun facts for the state",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="Last time the fact list was written (UTC)",
        ),
        sa.PrimaryKeyConstraint("state_code"),
    )


def downgrade() -> None:
    op.drop_table("fact_sheets")
