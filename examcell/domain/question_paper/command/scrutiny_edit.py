import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.model.value import PaperId, Section
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler


class ScrutinyEdit(Command):
    id: PaperId
    sections: list[Section]


class ScrutinyEditHandler(CommandHandler[ScrutinyEdit, PaperTransitioned]):
    __auth__ = requires(Capability.QP_SCRUTINY_EDIT)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: ScrutinyEdit) -> PaperTransitioned:
        with logfire.span("ScrutinyEdit"):
            paper = await self.service.edit_by_scrutiny(self.principal, cmd.id, cmd.sections)
            return PaperTransitioned.of(paper)
