"""Tests for bearer token verification."""

import jwt
import pytest

from examcell.config import JwtConfig
from examcell.domain.auth.model.role import Role
from examcell.domain.auth.service.token import TokenService

SECRET = "unit-test-secret-long-enough-for-hs256"


class TestTokenService:
    def test_issued_token_validates(self):
        service = TokenService(_config=JwtConfig(secret=SECRET))
        token = service.create_access_token("user_abc", Role.HOD, "CSE")

        payload = service.validate_access_token(token)
        assert payload["sub"] == "user_abc"
        assert payload["role"] == "HOD"
        assert payload["department"] == "CSE"

    def test_wrong_secret_rejected(self):
        issuer = TokenService(_config=JwtConfig(secret=SECRET))
        verifier = TokenService(_config=JwtConfig(secret=SECRET + "-other"))

        with pytest.raises(jwt.InvalidTokenError):
            verifier.validate_access_token(issuer.create_access_token("user_abc"))

    def test_expired_token_rejected(self):
        service = TokenService(_config=JwtConfig(secret=SECRET))
        token = service.create_access_token("user_abc", expires_minutes=-1)

        with pytest.raises(jwt.ExpiredSignatureError):
            service.validate_access_token(token)

    def test_audience_enforced_when_configured(self):
        issuer = TokenService(_config=JwtConfig(secret=SECRET, audience="other-app"))
        verifier = TokenService(_config=JwtConfig(secret=SECRET, audience="examcell"))

        with pytest.raises(jwt.InvalidAudienceError):
            verifier.validate_access_token(issuer.create_access_token("user_abc"))
