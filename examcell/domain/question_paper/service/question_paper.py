import logging
from collections.abc import Callable, Sequence

from examcell.domain.auth.model.principal import Principal
from examcell.domain.auth.model.role import ACADEMIC_STAFF
from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.auth.port.directory import StaffDirectory
from examcell.domain.auth.service.identity import resolve_staff
from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import (
    LOCKED_STATUSES,
    PaperId,
    Section,
)
from examcell.domain.question_paper.model.workflow import WorkflowEvent
from examcell.domain.question_paper.port.repository import (
    PaperFilter,
    QuestionPaperRepository,
)
from examcell.domain.shared.authorization.capability import Capability
from examcell.domain.shared.authorization.guarded import Guarded
from examcell.domain.shared.authorization.policy_set import POLICY_SET, PolicySet
from examcell.domain.shared.error import NotFoundError, ValidationError
from examcell.domain.shared.service import Service
from examcell.domain.subject.model.value import Subject, SubjectId
from examcell.domain.subject.port.reader import SubjectReader

logger = logging.getLogger(__name__)


class QuestionPaperService(Service):
    paper_repo: QuestionPaperRepository
    subject_reader: SubjectReader
    staff_directory: StaffDirectory
    exam_types: tuple[str, ...]
    policy_set: PolicySet = POLICY_SET

    async def assign(
        self,
        principal: Principal,
        *,
        subject_id: SubjectId,
        exam_type: str,
        setter_ref: str | StaffId,
        attempt: int = 1,
    ) -> QuestionPaper:
        self.policy_set.guard(principal, Capability.QP_ASSIGN)

        if exam_type not in self.exam_types:
            raise ValidationError(
                f"Unknown exam type '{exam_type}'. Allowed: {list(self.exam_types)}",
                field="exam_type",
            )
        if attempt < 1:
            raise ValidationError("Attempt must be a positive integer", field="attempt")

        subject = await self.subject_reader.get(subject_id)
        if subject is None:
            raise NotFoundError(f"Subject not found: {subject_id}")

        setter = await self._resolve_author(setter_ref, field="setter_id")

        paper = QuestionPaper.assign(
            subject=subject,
            exam_type=exam_type,
            attempt=attempt,
            setter=setter,
            assigned_by=principal.user_id,
        )
        await self.paper_repo.insert(paper)

        logger.info(
            "Question paper assigned: id=%s subject=%s exam_type=%s attempt=%d setter=%s",
            paper.id,
            subject.code,
            exam_type,
            attempt,
            setter,
        )
        return paper

    async def get(self, principal: Principal, paper_id: PaperId) -> QuestionPaper:
        return await self._load(principal, paper_id, Capability.QP_READ)

    async def edit_by_setter(
        self,
        principal: Principal,
        paper_id: PaperId,
        sections: Sequence[Section],
    ) -> QuestionPaper:
        return await self._transition(
            principal,
            paper_id,
            Capability.QP_EDIT,
            lambda p: p.edit_by_setter(principal.user_id, sections),
        )

    async def submit_to_coe(self, principal: Principal, paper_id: PaperId) -> QuestionPaper:
        return await self._transition(
            principal,
            paper_id,
            Capability.QP_SUBMIT,
            lambda p: p.submit_to_coe(principal.user_id),
        )

    async def send_to_scrutiny(
        self,
        principal: Principal,
        paper_id: PaperId,
        scrutiny_ref: str | StaffId,
    ) -> QuestionPaper:
        paper = await self._load(principal, paper_id, Capability.QP_SEND_TO_SCRUTINY)
        # Report a wrong state before a bad identifier.
        paper.guard(WorkflowEvent.SEND_TO_SCRUTINY, principal.user_id)
        reviewer = await self._resolve_author(scrutiny_ref, field="scrutiny_staff_id")
        return await self._apply(
            paper, lambda p: p.send_to_scrutiny(principal.user_id, reviewer)
        )

    async def edit_by_scrutiny(
        self,
        principal: Principal,
        paper_id: PaperId,
        sections: Sequence[Section],
    ) -> QuestionPaper:
        return await self._transition(
            principal,
            paper_id,
            Capability.QP_SCRUTINY_EDIT,
            lambda p: p.edit_by_scrutiny(principal.user_id, sections),
        )

    async def submit_after_scrutiny(
        self,
        principal: Principal,
        paper_id: PaperId,
        note: str,
    ) -> QuestionPaper:
        return await self._transition(
            principal,
            paper_id,
            Capability.QP_SCRUTINY_SUBMIT,
            lambda p: p.submit_after_scrutiny(principal.user_id, note),
        )

    async def approve(
        self,
        principal: Principal,
        paper_id: PaperId,
        note: str | None = None,
    ) -> QuestionPaper:
        return await self._transition(
            principal,
            paper_id,
            Capability.QP_APPROVE,
            lambda p: p.approve(principal.user_id, note or "Final approval"),
        )

    async def send_back(
        self,
        principal: Principal,
        paper_id: PaperId,
        note: str,
    ) -> QuestionPaper:
        return await self._transition(
            principal,
            paper_id,
            Capability.QP_SEND_BACK,
            lambda p: p.send_back(principal.user_id, note),
        )

    async def delete(self, principal: Principal, paper_id: PaperId) -> None:
        paper = await self._load(principal, paper_id, Capability.QP_DELETE)
        paper.ensure_deletable()
        await self.paper_repo.delete(paper)
        logger.warning(
            "Question paper deleted: id=%s status=%s by=%s",
            paper.id,
            paper.status,
            principal.user_id,
        )

    async def list_all(
        self,
        principal: Principal,
        criteria: PaperFilter,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[QuestionPaper], int]:
        self.policy_set.guard(principal, Capability.QP_LIST_ALL)
        return await self._list(criteria, limit=limit, offset=offset)

    async def list_mine(
        self,
        principal: Principal,
        criteria: PaperFilter,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[QuestionPaper], int]:
        self.policy_set.guard(principal, Capability.QP_LIST_OWN)
        scoped = criteria.model_copy(update={"setter": principal.user_id})
        return await self._list(scoped, limit=limit, offset=offset)

    async def list_scrutiny_assignments(
        self,
        principal: Principal,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[QuestionPaper], int]:
        self.policy_set.guard(principal, Capability.QP_LIST_OWN)
        criteria = PaperFilter(scrutiny_staff=principal.user_id)
        return await self._list(criteria, limit=limit, offset=offset)

    async def list_locked(
        self,
        principal: Principal,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[list[QuestionPaper], int]:
        self.policy_set.guard(principal, Capability.QP_LIST_ALL)
        criteria = PaperFilter(statuses=LOCKED_STATUSES)
        return await self._list(criteria, limit=limit, offset=offset)

    async def lookup_labels(
        self,
        papers: Sequence[QuestionPaper],
    ) -> tuple[dict[SubjectId, Subject], dict[StaffId, StaffMember]]:
        """Fetch the subjects and staff a page of papers refers to, once per distinct id."""
        subjects: dict[SubjectId, Subject] = {}
        for subject_id in {p.subject_id for p in papers}:
            subject = await self.subject_reader.get(subject_id)
            if subject is not None:
                subjects[subject_id] = subject

        staff_ids = {p.setter for p in papers}
        staff_ids |= {p.scrutiny_staff for p in papers if p.scrutiny_staff is not None}
        staff: dict[StaffId, StaffMember] = {}
        for staff_id in staff_ids:
            member = await self.staff_directory.get(staff_id)
            if member is not None:
                staff[staff_id] = member

        return subjects, staff

    async def _resolve_author(self, ref: str | StaffId, *, field: str) -> StaffId:
        """Resolve a setter or reviewer; only academic staff can ever act on a paper."""
        member = await resolve_staff(ref, self.staff_directory, field=field)
        if member.role not in ACADEMIC_STAFF:
            logger.warning(
                "Rejected %s: staff=%s role=%s is not academic staff",
                field,
                member.id,
                member.role,
            )
            raise ValidationError(
                f"{member.name} ({member.role}) cannot set or scrutinise question papers",
                field=field,
            )
        return member.id

    async def _list(
        self,
        criteria: PaperFilter,
        *,
        limit: int | None,
        offset: int | None,
    ) -> tuple[list[QuestionPaper], int]:
        items = await self.paper_repo.list(criteria, limit=limit, offset=offset)
        total = await self.paper_repo.count(criteria)
        return items, total

    async def _load(
        self,
        principal: Principal,
        paper_id: PaperId,
        capability: Capability,
    ) -> QuestionPaper:
        paper = await self.paper_repo.get(paper_id)
        if paper is None:
            raise NotFoundError(f"Question paper not found: {paper_id}")
        return Guarded(paper, principal, self.policy_set).check(capability)

    async def _transition(
        self,
        principal: Principal,
        paper_id: PaperId,
        capability: Capability,
        change: Callable[[QuestionPaper], None],
    ) -> QuestionPaper:
        paper = await self._load(principal, paper_id, capability)
        return await self._apply(paper, change)

    async def _apply(
        self,
        paper: QuestionPaper,
        change: Callable[[QuestionPaper], None],
    ) -> QuestionPaper:
        expected_status = paper.status
        change(paper)
        await self.paper_repo.update(paper, expected_status=expected_status)

        entry = paper.history[-1]
        logger.info(
            "Question paper transition: id=%s action=%s %s -> %s by=%s",
            paper.id,
            entry.action,
            expected_status,
            paper.status,
            entry.by,
        )
        return paper
