import logfire

from examcell.domain.auth.model.principal import Principal
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.model.value import PaperId, Section
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.gate import requires
from examcell.domain.shared.command import Command, CommandHandler


class EditQuestionPaper(Command):
    id: PaperId
    sections: list[Section]


class EditQuestionPaperHandler(CommandHandler[EditQuestionPaper, PaperTransitioned]):
    __auth__ = requires(Capability.QP_EDIT)
    principal: Principal
    service: QuestionPaperService

    async def run(self, cmd: EditQuestionPaper) -> PaperTransitioned:
        with logfire.span("EditQuestionPaper"):
            paper = await self.service.edit_by_setter(self.principal, cmd.id, cmd.sections)
            return PaperTransitioned.of(paper)
