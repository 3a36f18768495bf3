"""Question paper REST routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from examcell.domain.question_paper.command.approve import (
    ApproveQuestionPaper,
    ApproveQuestionPaperHandler,
)
from examcell.domain.question_paper.command.assign import (
    AssignQuestionPaper,
    AssignQuestionPaperHandler,
    QuestionPaperAssigned,
)
from examcell.domain.question_paper.command.delete import (
    DeleteQuestionPaper,
    DeleteQuestionPaperHandler,
    QuestionPaperDeleted,
)
from examcell.domain.question_paper.command.edit import (
    EditQuestionPaper,
    EditQuestionPaperHandler,
)
from examcell.domain.question_paper.command.result import PaperTransitioned
from examcell.domain.question_paper.command.scrutiny_edit import (
    ScrutinyEdit,
    ScrutinyEditHandler,
)
from examcell.domain.question_paper.command.scrutiny_submit import (
    ScrutinySubmit,
    ScrutinySubmitHandler,
)
from examcell.domain.question_paper.command.send_back import SendBack, SendBackHandler
from examcell.domain.question_paper.command.send_to_scrutiny import (
    SendToScrutiny,
    SendToScrutinyHandler,
)
from examcell.domain.question_paper.command.submit import SubmitToCOE, SubmitToCOEHandler
from examcell.domain.question_paper.model.value import PaperId, PaperStatus, Section
from examcell.domain.question_paper.query.get_question_paper import (
    GetQuestionPaper,
    GetQuestionPaperHandler,
    PaperDetail,
)
from examcell.domain.question_paper.query.list_exam_types import (
    ExamTypeList,
    ListExamTypes,
    ListExamTypesHandler,
)
from examcell.domain.question_paper.query.list_locked import (
    ListLockedQuestionPapers,
    ListLockedQuestionPapersHandler,
)
from examcell.domain.question_paper.query.list_my_question_papers import (
    ListMyQuestionPapers,
    ListMyQuestionPapersHandler,
)
from examcell.domain.question_paper.query.list_question_papers import (
    ListQuestionPapers,
    ListQuestionPapersHandler,
    PaperList,
)
from examcell.domain.question_paper.query.list_scrutiny_assignments import (
    ListScrutinyAssignments,
    ListScrutinyAssignmentsHandler,
)

router = APIRouter(prefix="/question-papers", tags=["Question Papers"], route_class=DishkaRoute)


class SectionsBody(BaseModel):
    sections: list[Section]


class NoteBody(BaseModel):
    note: str = ""


class ScrutinyAssignmentBody(BaseModel):
    scrutiny_staff_id: str


# Exam office


@router.post("", response_model=QuestionPaperAssigned, status_code=201)
async def assign_question_paper(
    body: AssignQuestionPaper,
    handler: FromDishka[AssignQuestionPaperHandler],
) -> QuestionPaperAssigned:
    return await handler.run(body)


@router.get("", response_model=PaperList)
async def list_question_papers(
    handler: FromDishka[ListQuestionPapersHandler],
    status: PaperStatus | None = None,
    department: str | None = None,
    semester: int | None = None,
    exam_type: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    offset: int | None = Query(default=None, ge=0),
) -> PaperList:
    return await handler.run(
        ListQuestionPapers(
            status=status,
            department=department,
            semester=semester,
            exam_type=exam_type,
            limit=limit,
            offset=offset,
        )
    )


@router.get("/locked", response_model=PaperList)
async def list_locked_question_papers(
    handler: FromDishka[ListLockedQuestionPapersHandler],
    limit: int | None = Query(default=None, ge=1),
    offset: int | None = Query(default=None, ge=0),
) -> PaperList:
    return await handler.run(ListLockedQuestionPapers(limit=limit, offset=offset))


@router.get("/exam-types", response_model=ExamTypeList)
async def list_exam_types(handler: FromDishka[ListExamTypesHandler]) -> ExamTypeList:
    return await handler.run(ListExamTypes())


# Staff


@router.get("/mine", response_model=PaperList)
async def list_my_question_papers(
    handler: FromDishka[ListMyQuestionPapersHandler],
    status: PaperStatus | None = None,
    limit: int | None = Query(default=None, ge=1),
    offset: int | None = Query(default=None, ge=0),
) -> PaperList:
    return await handler.run(ListMyQuestionPapers(status=status, limit=limit, offset=offset))


@router.get("/scrutiny", response_model=PaperList)
async def list_scrutiny_assignments(
    handler: FromDishka[ListScrutinyAssignmentsHandler],
    limit: int | None = Query(default=None, ge=1),
    offset: int | None = Query(default=None, ge=0),
) -> PaperList:
    return await handler.run(ListScrutinyAssignments(limit=limit, offset=offset))


@router.get("/{paper_id}", response_model=PaperDetail)
async def get_question_paper(
    paper_id: UUID,
    handler: FromDishka[GetQuestionPaperHandler],
) -> PaperDetail:
    return await handler.run(GetQuestionPaper(id=PaperId(paper_id)))


@router.put("/{paper_id}/sections", response_model=PaperTransitioned)
async def edit_question_paper(
    paper_id: UUID,
    body: SectionsBody,
    handler: FromDishka[EditQuestionPaperHandler],
) -> PaperTransitioned:
    return await handler.run(EditQuestionPaper(id=PaperId(paper_id), sections=body.sections))


@router.post("/{paper_id}/submit", response_model=PaperTransitioned)
async def submit_to_coe(
    paper_id: UUID,
    handler: FromDishka[SubmitToCOEHandler],
) -> PaperTransitioned:
    return await handler.run(SubmitToCOE(id=PaperId(paper_id)))


@router.post("/{paper_id}/scrutiny", response_model=PaperTransitioned)
async def send_to_scrutiny(
    paper_id: UUID,
    body: ScrutinyAssignmentBody,
    handler: FromDishka[SendToScrutinyHandler],
) -> PaperTransitioned:
    return await handler.run(
        SendToScrutiny(id=PaperId(paper_id), scrutiny_staff_id=body.scrutiny_staff_id)
    )


@router.put("/{paper_id}/scrutiny/sections", response_model=PaperTransitioned)
async def scrutiny_edit(
    paper_id: UUID,
    body: SectionsBody,
    handler: FromDishka[ScrutinyEditHandler],
) -> PaperTransitioned:
    return await handler.run(ScrutinyEdit(id=PaperId(paper_id), sections=body.sections))


@router.post("/{paper_id}/scrutiny/submit", response_model=PaperTransitioned)
async def scrutiny_submit(
    paper_id: UUID,
    body: NoteBody,
    handler: FromDishka[ScrutinySubmitHandler],
) -> PaperTransitioned:
    return await handler.run(ScrutinySubmit(id=PaperId(paper_id), note=body.note))


@router.post("/{paper_id}/approve", response_model=PaperTransitioned)
async def approve_question_paper(
    paper_id: UUID,
    handler: FromDishka[ApproveQuestionPaperHandler],
    body: NoteBody | None = None,
) -> PaperTransitioned:
    note = body.note if body and body.note.strip() else None
    return await handler.run(ApproveQuestionPaper(id=PaperId(paper_id), note=note))


@router.post("/{paper_id}/send-back", response_model=PaperTransitioned)
async def send_back(
    paper_id: UUID,
    body: NoteBody,
    handler: FromDishka[SendBackHandler],
) -> PaperTransitioned:
    return await handler.run(SendBack(id=PaperId(paper_id), note=body.note))


@router.delete("/{paper_id}", response_model=QuestionPaperDeleted)
async def delete_question_paper(
    paper_id: UUID,
    handler: FromDishka[DeleteQuestionPaperHandler],
) -> QuestionPaperDeleted:
    return await handler.run(DeleteQuestionPaper(id=PaperId(paper_id)))
