from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from examcell.domain.auth.model.value import StaffId
from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import (
    HistoryEntry,
    PaperId,
    PaperStatus,
    Section,
)
from examcell.domain.subject.model.value import SubjectId


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


def row_to_history_entry(row: Mapping[str, Any]) -> HistoryEntry:
    return HistoryEntry(
        action=row["action"],
        by=StaffId(UUID(row["by_id"])),
        at=_aware(row["at"]),
        note=row.get("note") or "",
    )


def row_to_question_paper(
    row: Mapping[str, Any],
    history_rows: Iterable[Mapping[str, Any]],
) -> QuestionPaper:
    """Convert a question_papers row plus its ordered history rows to the aggregate."""
    scrutiny_raw = row.get("scrutiny_staff_id")
    return QuestionPaper(
        id=PaperId(UUID(row["id"])),
        subject_id=SubjectId(UUID(row["subject_id"])),
        department=row["department"],
        semester=row["semester"],
        exam_type=row["exam_type"],
        attempt=row["attempt"],
        setter=StaffId(UUID(row["setter_id"])),
        scrutiny_staff=StaffId(UUID(scrutiny_raw)) if scrutiny_raw else None,
        status=PaperStatus(row["status"]),
        sections=[Section.model_validate(s) for s in row.get("sections") or []],
        history=[row_to_history_entry(h) for h in history_rows],
        version=row["version"],
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
    )


def question_paper_to_dict(paper: QuestionPaper) -> dict[str, Any]:
    """Convert the aggregate to a question_papers row. History is stored separately."""
    return {
        "id": str(paper.id),
        "subject_id": str(paper.subject_id),
        "department": paper.department,
        "semester": paper.semester,
        "exam_type": paper.exam_type,
        "attempt": paper.attempt,
        "setter_id": str(paper.setter),
        "scrutiny_staff_id": str(paper.scrutiny_staff) if paper.scrutiny_staff else None,
        "status": paper.status.value,
        "sections": [s.model_dump(mode="json") for s in paper.sections],
        "version": paper.version,
        "created_at": paper.created_at,
        "updated_at": paper.updated_at,
    }


def history_entry_to_dict(paper_id: PaperId, seq: int, entry: HistoryEntry) -> dict[str, Any]:
    return {
        "paper_id": str(paper_id),
        "seq": seq,
        "action": entry.action,
        "by_id": str(entry.by),
        "at": entry.at,
        "note": entry.note,
    }
