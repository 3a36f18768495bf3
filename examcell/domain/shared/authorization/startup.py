"""Startup validation for handler authorization declarations."""

import logging

from examcell.domain.shared.authorization.gate import Gate
from examcell.domain.shared.authorization.policy_set import POLICY_SET
from examcell.domain.shared.command import CommandHandler
from examcell.domain.shared.error import ConfigurationError
from examcell.domain.shared.query import QueryHandler

logger = logging.getLogger(__name__)


def validate_all_handlers() -> None:
    """Scan all CommandHandler and QueryHandler subclasses for an __auth__ gate.

    Also checks that every Capability has at least one policy rule.

    Raises ConfigurationError listing all handlers missing __auth__ declarations.
    """
    violations: list[str] = []

    handlers = [*CommandHandler.__subclasses__(), *QueryHandler.__subclasses__()]
    for handler_cls in handlers:
        if not isinstance(getattr(handler_cls, "__auth__", None), Gate):
            violations.append(f"Handler {handler_cls.__name__} has no __auth__ declaration")

    if violations:
        raise ConfigurationError(
            f"Authorization validation failed for {len(violations)} handler(s):\n"
            + "\n".join(f"  - {v}" for v in violations)
        )

    POLICY_SET.validate_coverage()
    logger.info("Authorization startup validation passed for %d handlers", len(handlers))
