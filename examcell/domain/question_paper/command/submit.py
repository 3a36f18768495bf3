import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.model.value import PaperId
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler


class SubmitToCOE(Command):
    id: PaperId


class SubmitToCOEHandler(CommandHandler[SubmitToCOE, PaperTransitioned]):
    __auth__ = requires(Capability.QP_SUBMIT)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: SubmitToCOE) -> PaperTransitioned:
        with logfire.span("SubmitToCOE"):
            paper = await self.service.submit_to_coe(self.principal, cmd.id)
            logfire.info("Question paper submitted to COE", paper_id=str(paper.id))
            return PaperTransitioned.of(paper)
