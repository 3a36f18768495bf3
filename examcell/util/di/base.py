from dishka import Provider as DishkaProvider

from examcell.util.di.scope import Scope


class Provider(DishkaProvider):
    """Project provider base. Unscoped providers live for the application."""

    scope = Scope.APP
