"""Fixtures for persistence and end-to-end tests on in-memory SQLite."""

from dataclasses import dataclass

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from examcell.domain.auth.model.role import Role
from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.subject.model.value import Subject, SubjectId
from examcell.infrastructure.persistence.database import create_session_factory
from examcell.infrastructure.persistence.repository.directory import (
    SQLAlchemyStaffDirectory,
    SQLAlchemySubjectReader,
)
from examcell.infrastructure.persistence.tables import metadata


@dataclass(frozen=True)
class MasterData:
    subject: Subject
    coe: StaffMember
    setter: StaffMember  # U1
    reviewer: StaffMember  # U2
    other: StaffMember  # U3, same role as the setter
    clerk: StaffMember  # fee office, not academic staff


def _member(external_id: str, name: str, role: Role, department: str = "CSE") -> StaffMember:
    return StaffMember(
        id=StaffId.generate(),
        external_id=external_id,
        name=name,
        role=role,
        department=department,
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]):
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def master_data(session_factory: async_sessionmaker[AsyncSession]) -> MasterData:
    data = MasterData(
        subject=Subject(
            id=SubjectId.generate(),
            code="CS601",
            name="Distributed Systems",
            department="CSE",
            semester=6,
        ),
        coe=_member("user_coe", "Controller of Exams", Role.COE, department="EXAM"),
        setter=_member("user_u1", "U1 Setter", Role.STAFF),
        reviewer=_member("user_u2", "U2 Reviewer", Role.HOD),
        other=_member("user_u3", "U3 Colleague", Role.STAFF),
        clerk=_member("user_fee", "Fee Clerk", Role.OFFICE_FEE, department="OFFICE"),
    )
    async with session_factory() as session:
        await SQLAlchemySubjectReader(session).add(data.subject)
        directory = SQLAlchemyStaffDirectory(session)
        for member in (data.coe, data.setter, data.reviewer, data.other, data.clerk):
            await directory.add(member)
        await session.commit()
    return data
