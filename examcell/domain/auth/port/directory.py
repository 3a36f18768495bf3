from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.shared.port import Port


class StaffDirectory(Port, Protocol):
    """Read-only lookup into the staff records kept by user management."""

    @abstractmethod
    async def get(self, staff_id: StaffId) -> StaffMember | None: ...

    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> StaffMember | None: ...
