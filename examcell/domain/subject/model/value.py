from uuid import UUID, uuid4

from pydantic import Field, RootModel

from examcell.domain.shared.model.value import ValueObject


class SubjectId(RootModel[UUID]):
    """Unique identifier for a Subject."""

    @classmethod
    def generate(cls) -> "SubjectId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class Subject(ValueObject):
    """Subject master data, read-only from this service's point of view."""

    id: SubjectId
    code: str
    name: str
    department: str
    semester: int = Field(ge=1, le=8)
