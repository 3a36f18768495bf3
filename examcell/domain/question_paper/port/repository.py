from __future__ import annotations

from abc import abstractmethod
from typing import List, Protocol

from examcell.domain.auth.model.value import StaffId
from examcell.domain.question_paper.model.aggregate import QuestionPaper
from examcell.domain.question_paper.model.value import PaperId, PaperStatus
from examcell.domain.shared.model.value import ValueObject
from examcell.domain.shared.port import Port


class PaperFilter(ValueObject):
    """Criteria for listing papers. Unset fields do not constrain the result."""

    statuses: frozenset[PaperStatus] | None = None
    department: str | None = None
    semester: int | None = None
    exam_type: str | None = None
    setter: StaffId | None = None
    scrutiny_staff: StaffId | None = None


class QuestionPaperRepository(Port, Protocol):
    @abstractmethod
    async def insert(self, paper: QuestionPaper) -> None:
        """Insert a new paper.

        Raises:
            DuplicateAssignmentError: If (subject, exam type, attempt, setter) is taken.
        """
        ...

    @abstractmethod
    async def get(self, paper_id: PaperId) -> QuestionPaper | None: ...

    @abstractmethod
    async def update(self, paper: QuestionPaper, *, expected_status: PaperStatus) -> None:
        """Persist a transition if the stored row still has `expected_status`
        and the version preceding `paper.version`, appending its newest history entry.

        Raises:
            StateConflictError: If another writer got there first.
        """
        ...

    @abstractmethod
    async def delete(self, paper: QuestionPaper) -> None:
        """Delete the paper if it is unchanged since it was loaded.

        Raises:
            StateConflictError: If the stored status or version differs.
        """
        ...

    @abstractmethod
    async def list(
        self,
        criteria: PaperFilter,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> List[QuestionPaper]: ...

    @abstractmethod
    async def count(self, criteria: PaperFilter) -> int: ...
