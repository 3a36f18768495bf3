"""Value objects for the auth domain."""

from uuid import UUID, uuid4

from pydantic import RootModel

from examcell.domain.auth.model.role import Role
from examcell.domain.shared.model.value import ValueObject


class StaffId(RootModel[UUID]):
    """Canonical internal identifier of a staff member."""

    @classmethod
    def generate(cls) -> "StaffId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class StaffMember(ValueObject):
    """Read-only projection of a staff record owned by the user-management service."""

    id: StaffId
    external_id: str | None = None  # identity-provider user id
    name: str
    role: Role
    department: str | None = None
    is_active: bool = True
