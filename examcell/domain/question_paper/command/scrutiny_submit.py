import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.model.value import PaperId
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler


class ScrutinySubmit(Command):
    id: PaperId
    note: str = ""


class ScrutinySubmitHandler(CommandHandler[ScrutinySubmit, PaperTransitioned]):
    __auth__ = requires(Capability.QP_SCRUTINY_SUBMIT)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: ScrutinySubmit) -> PaperTransitioned:
        with logfire.span("ScrutinySubmit"):
            paper = await self.service.submit_after_scrutiny(self.principal, cmd.id, cmd.note)
            return PaperTransitioned.of(paper)
