"""PolicySet: declarative authorization rules and the Relationship enum.

Contains PolicyRule, Relationship, allow() constructor, and the POLICY_SET constant.
This is the single source of truth for all "who can do what on which paper" rules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from examcell.domain.auth.model.role import ACADEMIC_STAFF, EXAM_OFFICE, Role
from examcell.domain.shared.authorization.capability import Capability

if TYPE_CHECKING:
    from examcell.domain.auth.model.principal import Principal

logger = logging.getLogger(__name__)


class Relationship(StrEnum):
    """Relationships between a principal and a question paper."""

    SETTER = "setter"
    SCRUTINY = "scrutiny_staff"


@dataclass(frozen=True)
class PolicyRule:
    """A single authorization rule in the policy set.

    ``roles=None`` admits any authenticated principal.
    """

    capability: Capability
    roles: frozenset[Role] | None = None
    relationship: Relationship | None = None


def allow(
    capability: Capability,
    *,
    roles: frozenset[Role] | set[Role] | None = None,
    relationship: Relationship | None = None,
) -> PolicyRule:
    """Convenience constructor for a policy rule."""
    return PolicyRule(
        capability=capability,
        roles=frozenset(roles) if roles is not None else None,
        relationship=relationship,
    )


class PolicySet:
    """Declarative set of all authorization rules.

    Evaluation: for a given capability, rules are tried in order.
    First match wins (allow). No match means deny.
    """

    def __init__(self, rules: list[PolicyRule]) -> None:
        self._rules = rules
        self._by_capability: dict[Capability, list[PolicyRule]] = {}
        for rule in rules:
            self._by_capability.setdefault(rule.capability, []).append(rule)

    def allows(self, role: Role, capability: Capability) -> bool:
        """Role-level check: could a caller with this role ever hold the capability?"""
        return any(
            rule.roles is None or role in rule.roles
            for rule in self._by_capability.get(capability, [])
        )

    def guard(
        self,
        principal: "Principal | None",
        capability: Capability,
        resource: Any = None,
    ) -> None:
        """Raise AuthorizationError if no rule allows this access."""
        from examcell.domain.shared.error import AuthorizationError

        if principal is None:
            raise AuthorizationError("Authentication required", code="missing_token")

        for rule in self._by_capability.get(capability, []):
            if self._matches(rule, principal, resource):
                logger.info(
                    "Authorization allowed: principal=%s role=%s capability=%s",
                    principal.user_id,
                    principal.role,
                    capability,
                )
                return

        logger.warning(
            "Authorization denied: principal=%s role=%s capability=%s",
            principal.user_id,
            principal.role,
            capability,
        )
        raise AuthorizationError(f"Access denied: {capability}", code="access_denied")

    def _matches(
        self,
        rule: PolicyRule,
        principal: "Principal",
        resource: Any,
    ) -> bool:
        if rule.roles is not None and principal.role not in rule.roles:
            return False
        if rule.relationship is not None:
            related = getattr(resource, rule.relationship.value, None)
            if related is None or related != principal.user_id:
                return False
        return True

    def validate_coverage(self) -> None:
        """Startup check: every Capability member must have at least one rule."""
        from examcell.domain.shared.error import ConfigurationError

        covered = {r.capability for r in self._rules}
        missing = set(Capability) - covered
        if missing:
            raise ConfigurationError(f"Capabilities without policy rules: {missing}")


POLICY_SET = PolicySet(
    [
        # Exam office
        allow(Capability.QP_ASSIGN, roles=EXAM_OFFICE),
        allow(Capability.QP_LIST_ALL, roles=EXAM_OFFICE),
        allow(Capability.QP_SEND_TO_SCRUTINY, roles=EXAM_OFFICE),
        allow(Capability.QP_APPROVE, roles=EXAM_OFFICE),
        allow(Capability.QP_SEND_BACK, roles=EXAM_OFFICE),
        allow(Capability.QP_DELETE, roles={Role.COE}),
        # Reads: exam office sees everything, staff only papers they are attached to
        allow(Capability.QP_READ, roles=EXAM_OFFICE),
        allow(Capability.QP_READ, roles=ACADEMIC_STAFF, relationship=Relationship.SETTER),
        allow(Capability.QP_READ, roles=ACADEMIC_STAFF, relationship=Relationship.SCRUTINY),
        allow(Capability.QP_LIST_OWN),
        # Setter (ownership-scoped)
        allow(Capability.QP_EDIT, roles=ACADEMIC_STAFF, relationship=Relationship.SETTER),
        allow(Capability.QP_SUBMIT, roles=ACADEMIC_STAFF, relationship=Relationship.SETTER),
        # Scrutiny (ownership-scoped)
        allow(
            Capability.QP_SCRUTINY_EDIT,
            roles=ACADEMIC_STAFF,
            relationship=Relationship.SCRUTINY,
        ),
        allow(
            Capability.QP_SCRUTINY_SUBMIT,
            roles=ACADEMIC_STAFF,
            relationship=Relationship.SCRUTINY,
        ),
    ]
)


def can(role: Role, capability: Capability) -> bool:
    """Capability table lookup used by handler gates."""
    return POLICY_SET.allows(role, capability)
