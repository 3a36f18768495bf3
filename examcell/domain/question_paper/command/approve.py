import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.model.value import PaperId
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler


class ApproveQuestionPaper(Command):
    id: PaperId
    note: str | None = None


class ApproveQuestionPaperHandler(CommandHandler[ApproveQuestionPaper, PaperTransitioned]):
    __auth__ = requires(Capability.QP_APPROVE)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: ApproveQuestionPaper) -> PaperTransitioned:
        with logfire.span("ApproveQuestionPaper"):
            paper = await self.service.approve(self.principal, cmd.id, cmd.note)
            logfire.info("Question paper approved and locked", paper_id=str(paper.id))
            return PaperTransitioned.of(paper)
