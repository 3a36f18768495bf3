from collections.abc import Iterable, Mapping
from datetime import datetime

from pydantic import BaseModel, Field

from examcell.domain.auth.model.principal import Principal
from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import PaperId, PaperStatus
from examcell.domain.question_paper.port.repository import PaperFilter
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.query import Query, QueryHandler, Result
from examcell.domain.subject.model.value import Subject, SubjectId


class ListQuestionPapers(Query):
    status: PaperStatus | None = None
    department: str | None = None
    semester: int | None = None
    exam_type: str | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)


class PaperSummary(BaseModel):
    id: PaperId
    subject_id: SubjectId
    subject_code: str | None = None
    subject_name: str | None = None
    department: str
    semester: int
    exam_type: str
    attempt: int
    setter: StaffId
    setter_name: str | None = None
    scrutiny_staff: StaffId | None
    scrutiny_staff_name: str | None = None
    status: PaperStatus
    version: int
    updated_at: datetime


class PaperList(Result):
    items: list[PaperSummary]
    total: int

    @classmethod
    def of(
        cls,
        papers: Iterable[QuestionPaper],
        total: int,
        *,
        subjects: Mapping[SubjectId, Subject] | None = None,
        staff: Mapping[StaffId, StaffMember] | None = None,
    ) -> "PaperList":
        """Summaries labelled with subject and staff names where they are known."""
        subjects = subjects or {}
        staff = staff or {}

        def name_of(staff_id: StaffId | None) -> str | None:
            member = staff.get(staff_id) if staff_id is not None else None
            return member.name if member else None

        items = []
        for p in papers:
            subject = subjects.get(p.subject_id)
            items.append(
                PaperSummary(
                    id=p.id,
                    subject_id=p.subject_id,
                    subject_code=subject.code if subject else None,
                    subject_name=subject.name if subject else None,
                    department=p.department,
                    semester=p.semester,
                    exam_type=p.exam_type,
                    attempt=p.attempt,
                    setter=p.setter,
                    setter_name=name_of(p.setter),
                    scrutiny_staff=p.scrutiny_staff,
                    scrutiny_staff_name=name_of(p.scrutiny_staff),
                    status=p.status,
                    version=p.version,
                    updated_at=p.updated_at,
                )
            )
        return cls(items=items, total=total)


class ListQuestionPapersHandler(QueryHandler[ListQuestionPapers, PaperList]):
    __auth__ = requires(Capability.QP_LIST_ALL)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: ListQuestionPapers) -> PaperList:
        criteria = PaperFilter(
            statuses=frozenset({cmd.status}) if cmd.status else None,
            department=cmd.department,
            semester=cmd.semester,
            exam_type=cmd.exam_type,
        )
        papers, total = await self.service.list_all(
            self.principal, criteria, limit=cmd.limit, offset=cmd.offset
        )
        subjects, staff = await self.service.lookup_labels(papers)
        return PaperList.of(papers, total, subjects=subjects, staff=staff)
