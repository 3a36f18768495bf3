from __future__ import annotations

import logging
from typing import List

from sqlalchemy import Select, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import PaperId, PaperStatus
from examcell.domain.question_paper.port.repository import (
    PaperFilter,
    QuestionPaperRepository,
)
from examcell.domain.shared.error import DuplicateAssignmentError, StateConflictError
from examcell.infrastructure.persistence.mappers.question_paper import (
    history_entry_to_dict,
    question_paper_to_dict,
    row_to_question_paper,
)
from examcell.infrastructure.persistence.tables import (
    question_paper_history_table,
    question_papers_table,
)

logger = logging.getLogger(__name__)

papers = question_papers_table
history = question_paper_history_table


def _apply_filter(stmt: Select, criteria: PaperFilter) -> Select:
    if criteria.statuses is not None:
        stmt = stmt.where(papers.c.status.in_([s.value for s in criteria.statuses]))
    if criteria.department is not None:
        stmt = stmt.where(papers.c.department == criteria.department)
    if criteria.semester is not None:
        stmt = stmt.where(papers.c.semester == criteria.semester)
    if criteria.exam_type is not None:
        stmt = stmt.where(papers.c.exam_type == criteria.exam_type)
    if criteria.setter is not None:
        stmt = stmt.where(papers.c.setter_id == str(criteria.setter))
    if criteria.scrutiny_staff is not None:
        stmt = stmt.where(papers.c.scrutiny_staff_id == str(criteria.scrutiny_staff))
    return stmt


class SQLAlchemyQuestionPaperRepository(QuestionPaperRepository):
    """SQLAlchemy implementation of QuestionPaperRepository (SQLite and PostgreSQL)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert(self, paper: QuestionPaper) -> None:
        try:
            await self.session.execute(insert(papers).values(**question_paper_to_dict(paper)))
            await self.session.execute(
                insert(history),
                [history_entry_to_dict(paper.id, i, e) for i, e in enumerate(paper.history)],
            )
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info(
                "Duplicate assignment rejected: subject=%s exam_type=%s attempt=%d setter=%s",
                paper.subject_id,
                paper.exam_type,
                paper.attempt,
                paper.setter,
            )
            raise DuplicateAssignmentError(
                f"A {paper.exam_type} paper (attempt {paper.attempt}) is already assigned "
                f"to this setter for subject {paper.subject_id}"
            ) from e

    async def get(self, paper_id: PaperId) -> QuestionPaper | None:
        stmt = select(papers).where(papers.c.id == str(paper_id))
        row = (await self.session.execute(stmt)).mappings().first()
        if row is None:
            return None
        return row_to_question_paper(dict(row), await self._history(str(paper_id)))

    async def update(self, paper: QuestionPaper, *, expected_status: PaperStatus) -> None:
        row = question_paper_to_dict(paper)
        del row["id"], row["created_at"]
        stmt = (
            update(papers)
            .where(
                papers.c.id == str(paper.id),
                papers.c.status == expected_status.value,
                papers.c.version == paper.version - 1,
            )
            .values(**row)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            raise StateConflictError(
                f"Question paper {paper.id} was changed by someone else; reload and retry"
            )

        seq = len(paper.history) - 1
        await self.session.execute(
            insert(history).values(**history_entry_to_dict(paper.id, seq, paper.history[-1]))
        )
        await self.session.flush()

    async def delete(self, paper: QuestionPaper) -> None:
        result = await self.session.execute(
            delete(papers).where(
                papers.c.id == str(paper.id),
                papers.c.status == paper.status.value,
                papers.c.version == paper.version,
            )
        )
        if result.rowcount != 1:
            raise StateConflictError(
                f"Question paper {paper.id} was changed by someone else; reload and retry"
            )
        await self.session.execute(delete(history).where(history.c.paper_id == str(paper.id)))
        await self.session.flush()

    async def list(
        self,
        criteria: PaperFilter,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[QuestionPaper]:
        stmt = _apply_filter(select(papers), criteria).order_by(
            papers.c.created_at.desc(), papers.c.id
        )
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)

        rows = (await self.session.execute(stmt)).mappings().all()
        if not rows:
            return []

        ids = [r["id"] for r in rows]
        hist_stmt = (
            select(history)
            .where(history.c.paper_id.in_(ids))
            .order_by(history.c.paper_id, history.c.seq)
        )
        by_paper: dict[str, list[dict]] = {pid: [] for pid in ids}
        for h in (await self.session.execute(hist_stmt)).mappings().all():
            by_paper[h["paper_id"]].append(dict(h))

        return [row_to_question_paper(dict(r), by_paper[r["id"]]) for r in rows]

    async def count(self, criteria: PaperFilter) -> int:
        stmt = _apply_filter(select(func.count()).select_from(papers), criteria)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def _history(self, paper_id: str) -> list[dict]:
        stmt = select(history).where(history.c.paper_id == paper_id).order_by(history.c.seq)
        return [dict(h) for h in (await self.session.execute(stmt)).mappings().all()]
