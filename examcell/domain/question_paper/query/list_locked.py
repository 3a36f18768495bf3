from pydantic import Field

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.query.list_question_papers import PaperList
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.query import Query, QueryHandler


class ListLockedQuestionPapers(Query):
    limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)


class ListLockedQuestionPapersHandler(QueryHandler[ListLockedQuestionPapers, PaperList]):
    __auth__ = requires(Capability.QP_LIST_ALL)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: ListLockedQuestionPapers) -> PaperList:
        papers, total = await self.service.list_locked(
            self.principal, limit=cmd.limit, offset=cmd.offset
        )
        subjects, staff = await self.service.lookup_labels(papers)
        return PaperList.of(papers, total, subjects=subjects, staff=staff)
