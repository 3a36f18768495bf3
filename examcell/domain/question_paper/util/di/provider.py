from dishka import provide

from examcell.config import Config
from examcell.domain.auth.port.directory import StaffDirectory
from examcell.domain.question_paper.command.approve import ApproveQuestionPaperHandler
from examcell.domain.question_paper.command.assign import AssignQuestionPaperHandler
from examcell.domain.question_paper.command.delete import DeleteQuestionPaperHandler
from examcell.domain.question_paper.command.edit import EditQuestionPaperHandler
from examcell.domain.question_paper.command.scrutiny_edit import ScrutinyEditHandler
from examcell.domain.question_paper.command.scrutiny_submit import ScrutinySubmitHandler
from examcell.domain.question_paper.command.send_back import SendBackHandler
from examcell.domain.question_paper.command.send_to_scrutiny import SendToScrutinyHandler
from examcell.domain.question_paper.command.submit import SubmitToCOEHandler
from examcell.domain.question_paper.port.repository import QuestionPaperRepository
from examcell.domain.question_paper.query.get_question_paper import GetQuestionPaperHandler
from examcell.domain.question_paper.query.list_exam_types import ListExamTypesHandler
from examcell.domain.question_paper.query.list_locked import ListLockedQuestionPapersHandler
from examcell.domain.question_paper.query.list_my_question_papers import (
    ListMyQuestionPapersHandler,
)
from examcell.domain.question_paper.query.list_question_papers import (
    ListQuestionPapersHandler,
)
from examcell.domain.question_paper.query.list_scrutiny_assignments import (
    ListScrutinyAssignmentsHandler,
)
from examcell.domain.question_paper.service.question_paper import QuestionPaperService
from examcell.domain.subject.port.reader import SubjectReader
from examcell.util.di.base import Provider
from examcell.util.di.scope import Scope


class QuestionPaperProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_question_paper_service(
        self,
        paper_repo: QuestionPaperRepository,
        subject_reader: SubjectReader,
        staff_directory: StaffDirectory,
        config: Config,
    ) -> QuestionPaperService:
        return QuestionPaperService(
            paper_repo=paper_repo,
            subject_reader=subject_reader,
            staff_directory=staff_directory,
            exam_types=tuple(config.workflow.exam_types),
        )

    # Command Handlers
    assign_handler = provide(AssignQuestionPaperHandler, scope=Scope.UOW)
    edit_handler = provide(EditQuestionPaperHandler, scope=Scope.UOW)
    submit_handler = provide(SubmitToCOEHandler, scope=Scope.UOW)
    send_to_scrutiny_handler = provide(SendToScrutinyHandler, scope=Scope.UOW)
    scrutiny_edit_handler = provide(ScrutinyEditHandler, scope=Scope.UOW)
    scrutiny_submit_handler = provide(ScrutinySubmitHandler, scope=Scope.UOW)
    approve_handler = provide(ApproveQuestionPaperHandler, scope=Scope.UOW)
    send_back_handler = provide(SendBackHandler, scope=Scope.UOW)
    delete_handler = provide(DeleteQuestionPaperHandler, scope=Scope.UOW)

    # Query Handlers
    get_handler = provide(GetQuestionPaperHandler, scope=Scope.UOW)
    list_handler = provide(ListQuestionPapersHandler, scope=Scope.UOW)
    list_mine_handler = provide(ListMyQuestionPapersHandler, scope=Scope.UOW)
    list_scrutiny_handler = provide(ListScrutinyAssignmentsHandler, scope=Scope.UOW)
    list_locked_handler = provide(ListLockedQuestionPapersHandler, scope=Scope.UOW)
    list_exam_types_handler = provide(ListExamTypesHandler, scope=Scope.UOW)
