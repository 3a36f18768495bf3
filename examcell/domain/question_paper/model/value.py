from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import Field, RootModel

from examcell.domain.auth.model.value import StaffId
from examcell.domain.shared.model.value import ValueObject


class PaperId(RootModel[UUID]):
    """Unique identifier for a QuestionPaper."""

    @classmethod
    def generate(cls) -> "PaperId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class PaperStatus(StrEnum):
    ASSIGNED = "Assigned"  # exam office created, setter not started
    DRAFT = "Draft"  # setter working
    SUBMITTED_TO_COE = "SubmittedToCOE"
    UNDER_SCRUTINY = "UnderScrutiny"
    CORRECTIONS_REQUESTED = "CorrectionsRequested"
    SUBMITTED_AFTER_SCRUTINY = "SubmittedToCOEAfterScrutiny"
    APPROVED_LOCKED = "ApprovedLocked"


LOCKED_STATUSES: frozenset[PaperStatus] = frozenset(
    {PaperStatus.SUBMITTED_AFTER_SCRUTINY, PaperStatus.APPROVED_LOCKED}
)
"""Statuses in which section content is frozen for every actor."""


class Question(ValueObject):
    q_no: str = Field(min_length=1)  # "Q1(a)", "Q2", ...
    text: str = ""
    marks: float = Field(ge=0)
    blooms_level: str | None = None
    choice_group: str | None = None  # e.g. "SectionA_Group1"


class Section(ValueObject):
    label: str = Field(min_length=1)  # "Section A"
    instructions: str = ""
    total_marks: float = Field(default=0, ge=0)
    questions: tuple[Question, ...] = ()


class HistoryEntry(ValueObject):
    """Immutable audit record of one workflow transition."""

    action: str
    by: StaffId
    at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    note: str = ""
