from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from examcell.config import Config
from examcell.domain.auth.port.directory import StaffDirectory
from examcell.domain.question_paper.port.repository import QuestionPaperRepository
from examcell.domain.subject.port.reader import SubjectReader
from examcell.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from examcell.infrastructure.persistence.repository.directory import (
    SQLAlchemyStaffDirectory,
    SQLAlchemySubjectReader,
)
from examcell.infrastructure.persistence.repository.question_paper import (
    SQLAlchemyQuestionPaperRepository,
)
from examcell.util.di.base import Provider
from examcell.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    def get_engine(self, config: Config) -> AsyncEngine:
        return create_db_engine(config)

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    paper_repo = provide(
        SQLAlchemyQuestionPaperRepository,
        scope=Scope.UOW,
        provides=QuestionPaperRepository,
    )
    staff_directory = provide(SQLAlchemyStaffDirectory, scope=Scope.UOW, provides=StaffDirectory)
    subject_reader = provide(SQLAlchemySubjectReader, scope=Scope.UOW, provides=SubjectReader)
