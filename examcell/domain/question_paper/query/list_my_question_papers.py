from pydantic import Field

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.model.value import PaperStatus
from examcell.domain.question_paper.port.repository import PaperFilter
from examcell.domain.question_paper.query.list_question_papers import PaperList
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.query import Query, QueryHandler


class ListMyQuestionPapers(Query):
    status: PaperStatus | None = None
    limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)


class ListMyQuestionPapersHandler(QueryHandler[ListMyQuestionPapers, PaperList]):
    """Papers where the caller is the setter."""

    __auth__ = requires(Capability.QP_LIST_OWN)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: ListMyQuestionPapers) -> PaperList:
        criteria = PaperFilter(statuses=frozenset({cmd.status}) if cmd.status else None)
        papers, total = await self.service.list_mine(
            self.principal, criteria, limit=cmd.limit, offset=cmd.offset
        )
        subjects, staff = await self.service.lookup_labels(papers)
        return PaperList.of(papers, total, subjects=subjects, staff=staff)
