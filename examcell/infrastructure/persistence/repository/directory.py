from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.auth.port.directory import StaffDirectory
from examcell.domain.subject.model.value import Subject, SubjectId
from examcell.domain.subject.port.reader import SubjectReader
from examcell.infrastructure.persistence.mappers.directory import (
    row_to_staff_member,
    row_to_subject,
    staff_member_to_dict,
    subject_to_dict,
)
from examcell.infrastructure.persistence.tables import staff_table, subjects_table


class SQLAlchemyStaffDirectory(StaffDirectory):
    """Staff lookups against the local `staff` mirror."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, staff_id: StaffId) -> StaffMember | None:
        stmt = select(staff_table).where(staff_table.c.id == str(staff_id))
        row = (await self.session.execute(stmt)).mappings().first()
        return row_to_staff_member(row) if row else None

    async def find_by_external_id(self, external_id: str) -> StaffMember | None:
        stmt = select(staff_table).where(staff_table.c.external_id == external_id)
        row = (await self.session.execute(stmt)).mappings().first()
        return row_to_staff_member(row) if row else None

    async def add(self, member: StaffMember) -> None:
        """Seed a staff record. Not part of the port; used by the CLI and tests."""
        await self.session.execute(insert(staff_table).values(**staff_member_to_dict(member)))
        await self.session.flush()


class SQLAlchemySubjectReader(SubjectReader):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, subject_id: SubjectId) -> Subject | None:
        stmt = select(subjects_table).where(subjects_table.c.id == str(subject_id))
        row = (await self.session.execute(stmt)).mappings().first()
        return row_to_subject(row) if row else None

    async def add(self, subject: Subject) -> None:
        """Seed a subject. Not part of the port; used by the CLI and tests."""
        await self.session.execute(insert(subjects_table).values(**subject_to_dict(subject)))
        await self.session.flush()
