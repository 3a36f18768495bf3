import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.model.value import PaperId
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler


class SendBack(Command):
    id: PaperId
    note: str = ""


class SendBackHandler(CommandHandler[SendBack, PaperTransitioned]):
    __auth__ = requires(Capability.QP_SEND_BACK)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: SendBack) -> PaperTransitioned:
        with logfire.span("SendBack"):
            paper = await self.service.send_back(self.principal, cmd.id, cmd.note)
            return PaperTransitioned.of(paper)
