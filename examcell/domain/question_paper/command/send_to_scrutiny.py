import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.model.value import PaperId
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler


class SendToScrutiny(Command):
    id: PaperId
    scrutiny_staff_id: str


class SendToScrutinyHandler(CommandHandler[SendToScrutiny, PaperTransitioned]):
    __auth__ = requires(Capability.QP_SEND_TO_SCRUTINY)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: SendToScrutiny) -> PaperTransitioned:
        with logfire.span("SendToScrutiny"):
            paper = await self.service.send_to_scrutiny(
                self.principal, cmd.id, cmd.scrutiny_staff_id
            )
            return PaperTransitioned.of(paper)
