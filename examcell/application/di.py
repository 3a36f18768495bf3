from dishka import AsyncContainer, from_context, make_async_container

from examcell.config import Config
from examcell.domain.auth.util.di import AuthProvider
from examcell.domain.question_paper.util.di import QuestionPaperProvider
from examcell.infrastructure.persistence import PersistenceProvider
from examcell.util.di.base import Provider
from examcell.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        QuestionPaperProvider(),
        AuthProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
