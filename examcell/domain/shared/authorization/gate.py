"""Handler-level authorization gates: public() and requires(Capability)."""

from __future__ import annotations

from dataclasses import dataclass

from examcell.domain.shared.authorization.capability import Capability


class Gate:
    """Base for handler-level authorization gates.

    Every CommandHandler/QueryHandler must declare ``__auth__: ClassVar[Gate]``.
    """


@dataclass(frozen=True)
class Public(Gate):
    """No authentication required."""


@dataclass(frozen=True)
class Requires(Gate):
    """Gate that requires the principal's role to hold the given capability.

    This is a coarse pre-filter; ownership is checked once the paper is loaded.
    """

    capability: Capability


_PUBLIC = Public()


def public() -> Public:
    """Mark a handler as publicly accessible (no auth required)."""
    return _PUBLIC


def requires(capability: Capability) -> Requires:
    """Mark a handler as requiring the given capability."""
    return Requires(capability=capability)


def enforce(handler: object, gate: object) -> None:
    """Evaluate a handler's ``__auth__`` gate against its ``principal`` field.

    Raises:
        ConfigurationError: If the handler declares no gate.
        AuthorizationError: If the principal is missing or lacks the capability.
    """
    import logging

    from examcell.domain.auth.model.principal import Principal
    from examcell.domain.shared.authorization.policy_set import can
    from examcell.domain.shared.error import AuthorizationError, ConfigurationError

    name = type(handler).__name__
    if not isinstance(gate, Gate):
        raise ConfigurationError(f"Handler {name} has no __auth__ declaration")

    if isinstance(gate, Public):
        return

    if isinstance(gate, Requires):
        principal = getattr(handler, "principal", None)
        if not isinstance(principal, Principal):
            raise AuthorizationError("Authentication required", code="missing_token")

        logging.getLogger("examcell.authz").debug(
            "Gate check: handler=%s, required=%s, role=%s, user_id=%s",
            name,
            gate.capability,
            principal.role,
            principal.user_id,
        )
        if not can(principal.role, gate.capability):
            raise AuthorizationError(
                f"Access denied: role {principal.role} cannot {gate.capability}",
                code="access_denied",
            )
        return

    raise ConfigurationError(  # pragma: no cover
        f"Handler {name} has unhandled __auth__ type: {type(gate).__name__}"
    )
