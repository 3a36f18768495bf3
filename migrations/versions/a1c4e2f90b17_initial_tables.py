"""initial_tables

Revision ID: a1c4e2f90b17
Revises:
Create Date: 2026-10-19 09:12:44.301527

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1c4e2f90b17"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # SUBJECTS
    op.create_table(
        "subjects",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("department", sa.String(), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    # STAFF
    op.create_table(
        "staff",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_id"),
    )

    # QUESTION PAPERS
    op.create_table(
        "question_papers",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("subject_id", sa.String(), nullable=False),
        sa.Column("department", sa.String(), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("exam_type", sa.String(16), nullable=False),
        sa.Column("attempt", sa.Integer(), nullable=False),
        sa.Column("setter_id", sa.String(), nullable=False),
        sa.Column("scrutiny_staff_id", sa.String(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("sections", sa.JSON(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"]),
        sa.UniqueConstraint(
            "subject_id",
            "exam_type",
            "attempt",
            "setter_id",
            name="uq_question_papers_assignment",
        ),
    )
    op.create_index("idx_question_papers_setter_id", "question_papers", ["setter_id"])
    op.create_index(
        "idx_question_papers_scrutiny_staff_id", "question_papers", ["scrutiny_staff_id"]
    )
    op.create_index("idx_question_papers_status", "question_papers", ["status"])

    # QUESTION PAPER HISTORY
    op.create_table(
        "question_paper_history",
        sa.Column("paper_id", sa.String(), nullable=False),
        sa.Column("seq", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("by_id", sa.String(), nullable=False),
        sa.Column("at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("paper_id", "seq", name="pk_question_paper_history"),
        sa.ForeignKeyConstraint(["paper_id"], ["question_papers.id"], ondelete="CASCADE"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("question_paper_history")

    op.drop_index("idx_question_papers_status", table_name="question_papers")
    op.drop_index("idx_question_papers_scrutiny_staff_id", table_name="question_papers")
    op.drop_index("idx_question_papers_setter_id", table_name="question_papers")
    op.drop_table("question_papers")

    op.drop_table("staff")
    op.drop_table("subjects")
