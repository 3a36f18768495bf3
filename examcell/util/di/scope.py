"""Custom Dishka scopes for the exam cell service."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, config, policy)
    - UOW: Unit of Work (one HTTP request, one database session)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
