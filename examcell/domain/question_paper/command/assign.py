import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.model.value import PaperId, PaperStatus
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler, Result
from examcell.domain.subject.model.value import SubjectId


class AssignQuestionPaper(Command):
    subject_id: SubjectId
    exam_type: str
    setter_id: str  # internal UUID or identity-provider user id
    attempt: int = 1


class QuestionPaperAssigned(Result):
    id: PaperId
    status: PaperStatus


class AssignQuestionPaperHandler(CommandHandler[AssignQuestionPaper, QuestionPaperAssigned]):
    __auth__ = requires(Capability.QP_ASSIGN)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: AssignQuestionPaper) -> QuestionPaperAssigned:
        with logfire.span("AssignQuestionPaper"):
            paper = await self.service.assign(
                self.principal,
                subject_id=cmd.subject_id,
                exam_type=cmd.exam_type,
                setter_ref=cmd.setter_id,
                attempt=cmd.attempt,
            )
            return QuestionPaperAssigned(id=paper.id, status=paper.status)
