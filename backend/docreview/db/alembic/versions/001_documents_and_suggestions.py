"""Documents and suggestions

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
- document (versioned by created_at)
- suggestion (references a document version)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create document and suggestion tables."""
    op.create_table(
        "document",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("kind", sa.Text(), server_default="text", nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id", "created_at"),
    )
    op.create_index("idx_document_user", "document", ["user_id", "created_at"])

    op.create_table(
        "suggestion",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("document_id", sa.Uuid(), nullable=False),
        sa.Column("document_created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("original_text", sa.Text(), nullable=False),
        sa.Column("suggested_text", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_resolved", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["document_id", "document_created_at"],
            ["document.id", "document.created_at"],
        ),
    )
    op.create_index("idx_suggestion_document", "suggestion", ["document_id", "created_at"])


def downgrade() -> None:
    """Drop document and suggestion tables."""
    op.drop_index("idx_suggestion_document", table_name="suggestion")
    op.drop_table("suggestion")
    op.drop_index("idx_document_user", table_name="document")
    op.drop_table("document")
