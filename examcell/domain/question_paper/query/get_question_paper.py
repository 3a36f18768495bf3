from datetime import datetime

from examcell.domain.auth.model.principal import Principal
from examcell.domain.auth.model.value import StaffId
from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import (
    HistoryEntry,
    PaperId,
    PaperStatus,
    Section,
)
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.query import Query, QueryHandler, Result
from examcell.domain.subject.model.value import SubjectId


class GetQuestionPaper(Query):
    id: PaperId


class PaperDetail(Result):
    id: PaperId
    subject_id: SubjectId
    department: str
    semester: int
    exam_type: str
    attempt: int
    setter: StaffId
    scrutiny_staff: StaffId | None
    status: PaperStatus
    is_locked: bool
    sections: list[Section]
    history: list[HistoryEntry]
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def of(cls, paper: QuestionPaper) -> "PaperDetail":
        return cls(
            id=paper.id,
            subject_id=paper.subject_id,
            department=paper.department,
            semester=paper.semester,
            exam_type=paper.exam_type,
            attempt=paper.attempt,
            setter=paper.setter,
            scrutiny_staff=paper.scrutiny_staff,
            status=paper.status,
            is_locked=paper.is_locked,
            sections=paper.sections,
            history=paper.history,
            version=paper.version,
            created_at=paper.created_at,
            updated_at=paper.updated_at,
        )


class GetQuestionPaperHandler(QueryHandler[GetQuestionPaper, PaperDetail]):
    __auth__ = requires(Capability.QP_READ)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: GetQuestionPaper) -> PaperDetail:
        paper = await self.service.get(self.principal, cmd.id)
        return PaperDetail.of(paper)
