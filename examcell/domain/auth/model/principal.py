"""Principal: the authenticated caller, resolved per-request."""

from dataclasses import dataclass

from examcell.domain.auth.model.identity import Identity
from examcell.domain.auth.model.role import Role
from examcell.domain.auth.model.value import StaffId


@dataclass(frozen=True)
class Principal(Identity):
    """The authenticated identity of the current requester.

    `user_id` is always the canonical internal id; the identity-provider token
    subject is resolved before a Principal is built.
    """

    user_id: StaffId
    role: Role
    department: str | None = None
    external_id: str | None = None
