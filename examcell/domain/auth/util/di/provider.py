"""DI provider for the auth domain: token verification and caller resolution."""

import logging

import jwt
from dishka import from_context, provide
from starlette.requests import Request

from examcell.config import Config
from examcell.domain.auth.model.identity import Anonymous, Identity
from examcell.domain.auth.model.principal import Principal
from examcell.domain.auth.model.role import Role
from examcell.domain.auth.port.directory import StaffDirectory
from examcell.domain.auth.service.identity import resolve_staff
from examcell.domain.auth.service.token import TokenService
from examcell.domain.shared.error import AuthorizationError, IdentityResolutionError
from examcell.util.di.base import Provider
from examcell.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthProvider(Provider):
    """DI provider for auth domain services."""

    request = from_context(provides=Request, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    async def get_identity(
        self,
        request: Request,
        token_service: TokenService,
        directory: StaffDirectory,
    ) -> Identity:
        """Resolve Identity from the bearer token and the staff directory.

        Returns Anonymous when no usable token is presented.

        Raises:
            AuthorizationError: If the token is valid but names no known staff member.
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return Anonymous()

        token = auth_header[7:]  # Remove "Bearer " prefix

        try:
            payload = token_service.validate_access_token(token)
        except jwt.InvalidTokenError as e:
            logger.info("Rejected bearer token: %s", e)
            return Anonymous()

        try:
            member = await resolve_staff(payload["sub"], directory)
        except IdentityResolutionError as e:
            raise AuthorizationError(
                "Caller is not a known staff member", code="unknown_identity"
            ) from e

        # The identity provider is authoritative for role; the directory fills gaps
        claimed_role = payload.get("role")
        role = Role(claimed_role) if claimed_role in {r.value for r in Role} else member.role

        logger.debug(
            "Identity resolved: sub=%s user_id=%s role=%s",
            payload["sub"],
            member.id,
            role,
        )
        return Principal(
            user_id=member.id,
            role=role,
            department=payload.get("department") or member.department,
            external_id=member.external_id,
        )

    @provide(scope=Scope.UOW)
    def get_principal(self, identity: Identity) -> Principal:
        """Extract Principal from Identity. Raises if not authenticated."""
        if isinstance(identity, Principal):
            return identity
        raise AuthorizationError("Authentication required", code="missing_token")
