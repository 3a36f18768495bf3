import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.model.value import PaperId
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler, Result


class DeleteQuestionPaper(Command):
    id: PaperId


class QuestionPaperDeleted(Result):
    id: PaperId


class DeleteQuestionPaperHandler(CommandHandler[DeleteQuestionPaper, QuestionPaperDeleted]):
    __auth__ = requires(Capability.QP_DELETE)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: DeleteQuestionPaper) -> QuestionPaperDeleted:
        with logfire.span("DeleteQuestionPaper"):
            await self.service.delete(self.principal, cmd.id)
            return QuestionPaperDeleted(id=cmd.id)
