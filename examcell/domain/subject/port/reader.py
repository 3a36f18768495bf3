from abc import abstractmethod
from typing import Protocol

from examcell.domain.shared.port import Port
from examcell.domain.subject.model.value import Subject, SubjectId


class SubjectReader(Port, Protocol):
    """Read-only access to subject master data."""

    @abstractmethod
    async def get(self, subject_id: SubjectId) -> Subject | None: ...
