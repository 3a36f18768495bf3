"""Access-token verification for requests coming from the identity provider."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from examcell.config import JwtConfig
from examcell.domain.auth.model.role import Role
from examcell.domain.shared.service import Service

logger = logging.getLogger(__name__)


class TokenService(Service):
    """Decode and verify bearer tokens.

    Tokens carry the caller's identity-provider user id in ``sub`` plus
    optional ``role`` and ``department`` claims.
    """

    _config: JwtConfig

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        options = {"require": ["sub", "exp"]}
        if self._config.audience is None:
            options["verify_aud"] = False  # type: ignore[assignment]
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=self._config.audience,
            options=options,
        )

    def create_access_token(
        self,
        subject: str,
        role: Role | None = None,
        department: str | None = None,
        expires_minutes: int = 60,
    ) -> str:
        """Issue a token in the identity provider's shape. Used by the dev CLI and tests."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": subject,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=expires_minutes)).timestamp()),
        }
        if role is not None:
            payload["role"] = role.value
        if department is not None:
            payload["department"] = department
        if self._config.audience is not None:
            payload["aud"] = self._config.audience

        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)
