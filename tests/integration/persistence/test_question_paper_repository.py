"""Tests for SQLAlchemyQuestionPaperRepository on SQLite."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import (
    PaperId,
    PaperStatus,
    Question,
    Section,
)
from examcell.domain.question_paper.port.repository import PaperFilter
from examcell.domain.shared.error import DuplicateAssignmentError, StateConflictError
from examcell.infrastructure.persistence.repository.question_paper import (
    SQLAlchemyQuestionPaperRepository,
)
from examcell.infrastructure.persistence.tables import question_paper_history_table


def _assign(data, exam_type: str = "SEE", attempt: int = 1, setter=None) -> QuestionPaper:
    return QuestionPaper.assign(
        subject=data.subject,
        exam_type=exam_type,
        attempt=attempt,
        setter=(setter or data.setter).id,
        assigned_by=data.coe.id,
    )


def _sections() -> list[Section]:
    return [
        Section(
            label="Part A",
            instructions="Answer all questions.",
            total_marks=20,
            questions=(
                Question(q_no="1(a)", text="State CAP.", marks=4, blooms_level="L1"),
                Question(q_no="1(b)", text="Explain Raft.", marks=16, choice_group="A1"),
            ),
        )
    ]


async def _history_rows(session: AsyncSession, paper_id: PaperId) -> int:
    stmt = (
        select(func.count())
        .select_from(question_paper_history_table)
        .where(question_paper_history_table.c.paper_id == str(paper_id))
    )
    return (await session.execute(stmt)).scalar_one()


class TestInsertAndGet:
    @pytest.mark.asyncio
    async def test_round_trip(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        paper = _assign(master_data)
        await repo.insert(paper)

        loaded = await repo.get(paper.id)

        assert loaded is not None
        assert loaded.id == paper.id
        assert loaded.setter == master_data.setter.id
        assert loaded.status == PaperStatus.ASSIGNED
        assert loaded.department == "CSE"
        assert [h.action for h in loaded.history] == ["Assigned"]
        assert loaded.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        assert await repo.get(PaperId.generate()) is None

    @pytest.mark.asyncio
    async def test_duplicate_assignment(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        await repo.insert(_assign(master_data))
        await session.commit()

        with pytest.raises(DuplicateAssignmentError) as exc_info:
            await repo.insert(_assign(master_data))
        assert exc_info.value.code == "duplicate_assignment"

    @pytest.mark.asyncio
    async def test_same_subject_different_tuple_allowed(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        await repo.insert(_assign(master_data))
        await repo.insert(_assign(master_data, attempt=2))
        await repo.insert(_assign(master_data, exam_type="IA1"))
        await repo.insert(_assign(master_data, setter=master_data.other))

        assert await repo.count(PaperFilter()) == 4


class TestConditionalUpdate:
    @pytest.mark.asyncio
    async def test_update_persists_sections_and_appends_history(
        self, session: AsyncSession, master_data
    ):
        repo = SQLAlchemyQuestionPaperRepository(session)
        paper = _assign(master_data)
        await repo.insert(paper)

        paper.edit_by_setter(master_data.setter.id, _sections())
        await repo.update(paper, expected_status=PaperStatus.ASSIGNED)

        loaded = await repo.get(paper.id)
        assert loaded.status == PaperStatus.DRAFT
        assert loaded.sections == _sections()
        assert loaded.version == 2
        assert [h.action for h in loaded.history] == ["Assigned", "EditedBySetter"]
        assert await _history_rows(session, paper.id) == 2

    @pytest.mark.asyncio
    async def test_stale_copy_loses(
        self, session_factory: async_sessionmaker[AsyncSession], master_data
    ):
        async with session_factory() as session:
            paper = _assign(master_data)
            paper.submit_to_coe(master_data.setter.id)
            repo = SQLAlchemyQuestionPaperRepository(session)
            await repo.insert(paper)
            await session.commit()

        # Two callers load the same SubmittedToCOE paper
        async with session_factory() as session:
            first = await SQLAlchemyQuestionPaperRepository(session).get(paper.id)
        async with session_factory() as session:
            second = await SQLAlchemyQuestionPaperRepository(session).get(paper.id)

        first.approve(master_data.coe.id)
        async with session_factory() as session:
            await SQLAlchemyQuestionPaperRepository(session).update(
                first, expected_status=PaperStatus.SUBMITTED_TO_COE
            )
            await session.commit()

        second.send_back(master_data.coe.id, "fix Q3")
        async with session_factory() as session:
            repo = SQLAlchemyQuestionPaperRepository(session)
            with pytest.raises(StateConflictError):
                await repo.update(second, expected_status=PaperStatus.SUBMITTED_TO_COE)

            stored = await repo.get(paper.id)
            assert stored.status == PaperStatus.APPROVED_LOCKED
            assert [h.action for h in stored.history][-1] == "ApprovedLocked"
            assert len(stored.history) == 3


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_paper_and_history(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        paper = _assign(master_data)
        await repo.insert(paper)

        await repo.delete(paper)

        assert await repo.get(paper.id) is None
        assert await _history_rows(session, paper.id) == 0

    @pytest.mark.asyncio
    async def test_delete_of_stale_copy_fails(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        paper = _assign(master_data)
        await repo.insert(paper)
        stale = paper.model_copy(deep=True)

        paper.submit_to_coe(master_data.setter.id)
        await repo.update(paper, expected_status=PaperStatus.ASSIGNED)

        with pytest.raises(StateConflictError):
            await repo.delete(stale)
        assert await repo.get(paper.id) is not None


class TestListing:
    @pytest.mark.asyncio
    async def test_filters(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        mine = _assign(master_data)
        theirs = _assign(master_data, setter=master_data.other)
        await repo.insert(mine)
        await repo.insert(theirs)

        theirs.submit_to_coe(master_data.other.id)
        await repo.update(theirs, expected_status=PaperStatus.ASSIGNED)
        theirs.send_to_scrutiny(master_data.coe.id, master_data.reviewer.id)
        await repo.update(theirs, expected_status=PaperStatus.SUBMITTED_TO_COE)

        by_setter = await repo.list(PaperFilter(setter=master_data.setter.id))
        assert [p.id for p in by_setter] == [mine.id]

        by_reviewer = await repo.list(PaperFilter(scrutiny_staff=master_data.reviewer.id))
        assert [p.id for p in by_reviewer] == [theirs.id]
        assert len(by_reviewer[0].history) == 3

        by_status = PaperFilter(statuses=frozenset({PaperStatus.ASSIGNED}))
        assert await repo.count(by_status) == 1

        assert await repo.count(PaperFilter(department="CSE", semester=6)) == 2
        assert await repo.count(PaperFilter(exam_type="IA2")) == 0

    @pytest.mark.asyncio
    async def test_pagination(self, session: AsyncSession, master_data):
        repo = SQLAlchemyQuestionPaperRepository(session)
        for attempt in range(1, 4):
            await repo.insert(_assign(master_data, attempt=attempt))

        page = await repo.list(PaperFilter(), limit=2, offset=1)
        assert len(page) == 2
        assert await repo.count(PaperFilter()) == 3
