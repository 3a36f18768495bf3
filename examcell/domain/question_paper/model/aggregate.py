from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import Field

from examcell.domain.auth.model.value import StaffId
from examcell.domain.question_paper.model.value import (
    LOCKED_STATUSES,
    HistoryEntry,
    PaperId,
    PaperStatus,
    Section,
)
from examcell.domain.question_paper.model.workflow import (
    CREATED_ACTION,
    Actor,
    Transition,
    WorkflowEvent,
    transition_for,
)
from examcell.domain.shared.error import AuthorizationError, StateConflictError, ValidationError
from examcell.domain.shared.model.aggregate import Aggregate
from examcell.domain.subject.model.value import Subject, SubjectId


class QuestionPaper(Aggregate):
    id: PaperId
    subject_id: SubjectId
    department: str  # copied from Subject at assignment, never re-synced
    semester: int
    exam_type: str
    attempt: int = Field(default=1, ge=1)
    setter: StaffId
    scrutiny_staff: StaffId | None = None
    status: PaperStatus = PaperStatus.ASSIGNED
    sections: list[Section] = []
    history: list[HistoryEntry] = []
    version: int = 1
    created_at: datetime
    updated_at: datetime

    @classmethod
    def assign(
        cls,
        *,
        subject: Subject,
        exam_type: str,
        attempt: int,
        setter: StaffId,
        assigned_by: StaffId,
    ) -> "QuestionPaper":
        now = datetime.now(UTC)
        return cls(
            id=PaperId.generate(),
            subject_id=subject.id,
            department=subject.department,
            semester=subject.semester,
            exam_type=exam_type,
            attempt=attempt,
            setter=setter,
            created_at=now,
            updated_at=now,
            history=[HistoryEntry(action=CREATED_ACTION, by=assigned_by, at=now)],
        )

    @property
    def is_locked(self) -> bool:
        return self.status in LOCKED_STATUSES

    def edit_by_setter(self, by: StaffId, sections: Sequence[Section]) -> None:
        t = self.guard(WorkflowEvent.EDIT_BY_SETTER, by)
        _validate_sections(sections)
        self.sections = list(sections)
        self._commit(t, by)

    def submit_to_coe(self, by: StaffId) -> None:
        t = self.guard(WorkflowEvent.SUBMIT_TO_COE, by)
        self._commit(t, by)

    def send_to_scrutiny(self, by: StaffId, scrutiny_staff: StaffId) -> None:
        t = self.guard(WorkflowEvent.SEND_TO_SCRUTINY, by)
        self.scrutiny_staff = scrutiny_staff
        self._commit(t, by)

    def edit_by_scrutiny(self, by: StaffId, sections: Sequence[Section]) -> None:
        t = self.guard(WorkflowEvent.EDIT_BY_SCRUTINY, by)
        _validate_sections(sections)
        _ensure_same_structure(self.sections, sections)
        self.sections = list(sections)
        self._commit(t, by)

    def submit_after_scrutiny(self, by: StaffId, note: str) -> None:
        t = self.guard(WorkflowEvent.SUBMIT_AFTER_SCRUTINY, by, note)
        self._commit(t, by, note)

    def approve(self, by: StaffId, note: str = "Final approval") -> None:
        t = self.guard(WorkflowEvent.APPROVE, by, note)
        self._commit(t, by, note)

    def send_back(self, by: StaffId, note: str) -> None:
        t = self.guard(WorkflowEvent.SEND_BACK, by, note)
        self._commit(t, by, note)

    def ensure_deletable(self) -> None:
        transition_for(WorkflowEvent.DELETE).ensure_source(self.status)

    def guard(self, event: WorkflowEvent, by: StaffId, note: str | None = None) -> Transition:
        """Run ownership, state and note checks for `event` without changing anything."""
        t = transition_for(event)
        if t.actor is Actor.SETTER and by != self.setter:
            raise AuthorizationError("Not your assignment", code="access_denied")
        if t.actor is Actor.SCRUTINY and (self.scrutiny_staff is None or by != self.scrutiny_staff):
            raise AuthorizationError("Paper is not assigned to you for scrutiny", code="access_denied")
        if self.is_locked and event in (WorkflowEvent.EDIT_BY_SETTER, WorkflowEvent.EDIT_BY_SCRUTINY):
            raise StateConflictError(f"Paper is locked in status {self.status}")
        t.ensure_source(self.status)
        if t.requires_note and not (note or "").strip():
            raise ValidationError(f"A note is required to {event}", field="note")
        return t

    def _commit(self, t: Transition, by: StaffId, note: str | None = None) -> None:
        now = datetime.now(UTC)
        self.status = t.next_status(self.status)
        self.history.append(HistoryEntry(action=t.action, by=by, at=now, note=(note or "").strip()))
        self.version += 1
        self.updated_at = now


def _validate_sections(sections: Sequence[Section]) -> None:
    seen: set[str] = set()
    for section in sections:
        for question in section.questions:
            key = question.q_no.strip()
            if key in seen:
                raise ValidationError(f"Duplicate question number '{key}'", field="sections")
            seen.add(key)


def _ensure_same_structure(current: Sequence[Section], proposed: Sequence[Section]) -> None:
    """Scrutiny may edit section and question fields but not add or drop whole sections."""
    if [s.label for s in current] != [s.label for s in proposed]:
        raise ValidationError(
            "Scrutiny edits must keep the existing sections; sections cannot be added or removed",
            field="sections",
        )
