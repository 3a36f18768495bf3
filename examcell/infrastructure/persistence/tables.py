"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.types import JSON

metadata = MetaData()

# ============================================================================
# SUBJECTS TABLE (master data, read-only to the workflow)
# ============================================================================
subjects_table = Table(
    "subjects",
    metadata,
    Column("id", String, primary_key=True),
    Column("code", String(32), nullable=False, unique=True),
    Column("name", String, nullable=False),
    Column("department", String, nullable=False),
    Column("semester", Integer, nullable=False),
)


# ============================================================================
# STAFF TABLE (directory mirror of the identity provider)
# ============================================================================
staff_table = Table(
    "staff",
    metadata,
    Column("id", String, primary_key=True),
    Column("external_id", String, nullable=True, unique=True),  # identity-provider user id
    Column("name", String, nullable=False),
    Column("role", String(32), nullable=False),
    Column("department", String, nullable=True),
    Column("is_active", Boolean, nullable=False, default=True),
)


# ============================================================================
# QUESTION PAPERS TABLE
# ============================================================================
question_papers_table = Table(
    "question_papers",
    metadata,
    Column("id", String, primary_key=True),
    Column("subject_id", String, ForeignKey("subjects.id"), nullable=False),
    Column("department", String, nullable=False),
    Column("semester", Integer, nullable=False),
    Column("exam_type", String(16), nullable=False),
    Column("attempt", Integer, nullable=False, default=1),
    Column("setter_id", String, nullable=False),
    Column("scrutiny_staff_id", String, nullable=True),
    Column("status", String(32), nullable=False),  # PaperStatus as string
    Column("sections", JSON, nullable=False),
    Column("version", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint(
        "subject_id",
        "exam_type",
        "attempt",
        "setter_id",
        name="uq_question_papers_assignment",
    ),
)

Index("idx_question_papers_setter_id", question_papers_table.c.setter_id)
Index("idx_question_papers_scrutiny_staff_id", question_papers_table.c.scrutiny_staff_id)
Index("idx_question_papers_status", question_papers_table.c.status)


# ============================================================================
# QUESTION PAPER HISTORY TABLE (append-only audit log)
# ============================================================================
question_paper_history_table = Table(
    "question_paper_history",
    metadata,
    Column(
        "paper_id",
        String,
        ForeignKey("question_papers.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("seq", Integer, nullable=False),  # 0-based position in the paper's history
    Column("action", String(32), nullable=False),
    Column("by_id", String, nullable=False),
    Column("at", DateTime(timezone=True), nullable=False),
    Column("note", Text, nullable=False, default=""),
    PrimaryKeyConstraint("paper_id", "seq", name="pk_question_paper_history"),
)
