from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.gate import public
from examcell.domain.shared.query import Query, QueryHandler, Result


class ListExamTypes(Query):
    pass


class ExamTypeList(Result):
    items: list[str]


class ListExamTypesHandler(QueryHandler[ListExamTypes, ExamTypeList]):
    __auth__ = public()
    service: QuestionPaperService

    async def run(self, cmd: ListExamTypes) -> ExamTypeList:
        return ExamTypeList(items=list(self.service.exam_types))
