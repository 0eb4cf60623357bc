"""Unit tests for session token issuing and verification."""

import time
from unittest.mock import Mock, patch

import jwt
import pytest

from pokecatch.core.errors import UnauthorizedAppError
from pokecatch.services.token_service import TokenService, get_token_service

SECRET = "unit-test-secret"


@pytest.fixture
def service() -> TokenService:
    return TokenService(secret=SECRET, ttl_seconds=3600)


class TestIssue:
    """Tokens carry only sub and exp."""

    def test_issued_token_verifies_to_user_id(self, service: TokenService) -> None:
        token = service.issue(42)
        assert service.verify(token) == 42

    def test_claims_are_subject_and_expiry(self) -> None:
        clock = Mock(return_value=1_700_000_000.0)
        service = TokenService(secret=SECRET, ttl_seconds=3600, clock=clock)

        payload = jwt.decode(
            service.issue(7),
            SECRET,
            algorithms=["HS256"],
            options={"verify_exp": False},
        )

        assert payload == {"sub": "7", "exp": 1_700_003_600}

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"secret": "", "ttl_seconds": 60},
            {"secret": SECRET, "ttl_seconds": 0},
        ],
    )
    def test_invalid_constructor_args(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            TokenService(**kwargs)


def test_get_token_service_uses_configured_secret() -> None:
    with patch("pokecatch.services.token_service.settings") as mock_settings:
        mock_settings.auth.jwt_secret = "configured-secret"
        mock_settings.auth.jwt_algorithm = "HS256"
        mock_settings.auth.token_ttl_seconds = 120

        service = get_token_service()

    assert service.ttl_seconds == 120
    payload = jwt.decode(service.issue(3), "configured-secret", algorithms=["HS256"])
    assert payload["sub"] == "3"


class TestVerify:
    """Every verification failure is Unauthorized."""

    def test_rejects_expired_token(self, service: TokenService) -> None:
        issued_two_hours_ago = TokenService(
            secret=SECRET,
            ttl_seconds=3600,
            clock=lambda: time.time() - 7200,
        )
        token = issued_two_hours_ago.issue(1)

        with pytest.raises(UnauthorizedAppError) as exc_info:
            service.verify(token)

        assert exc_info.value.code == "token_expired"

    def test_rejects_token_signed_with_other_secret(self, service: TokenService) -> None:
        forged = TokenService(secret="attacker-secret").issue(1)

        with pytest.raises(UnauthorizedAppError) as exc_info:
            service.verify(forged)

        assert exc_info.value.code == "invalid_token"

    @pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
    def test_rejects_malformed_token(self, service: TokenService, token: str) -> None:
        with pytest.raises(UnauthorizedAppError):
            service.verify(token)

    def test_rejects_token_without_expiry(self, service: TokenService) -> None:
        token = jwt.encode({"sub": "1"}, SECRET, algorithm="HS256")

        with pytest.raises(UnauthorizedAppError):
            service.verify(token)

    def test_rejects_non_numeric_subject(self, service: TokenService) -> None:
        token = jwt.encode(
            {"sub": "ash", "exp": int(time.time()) + 60}, SECRET, algorithm="HS256"
        )

        with pytest.raises(UnauthorizedAppError):
            service.verify(token)

    def test_ignores_other_claims(self, service: TokenService) -> None:
        token = jwt.encode(
            {"sub": "5", "exp": int(time.time()) + 60, "role": "admin", "aud": "anything"},
            SECRET,
            algorithm="HS256",
        )

        assert service.verify(token) == 5

    def test_expiry_follows_injected_clock(self) -> None:
        now = [1_700_000_000.0]
        service = TokenService(secret=SECRET, ttl_seconds=60, clock=lambda: now[0])
        token = service.issue(9)

        now[0] += 59
        assert service.verify(token) == 9

        now[0] += 1
        with pytest.raises(UnauthorizedAppError) as exc_info:
            service.verify(token)

        assert exc_info.value.code == "token_expired"

    def test_rejects_non_numeric_expiry(self, service: TokenService) -> None:
        token = jwt.encode({"sub": "1", "exp": "tomorrow"}, SECRET, algorithm="HS256")

        with pytest.raises(UnauthorizedAppError) as exc_info:
            service.verify(token)

        assert exc_info.value.code == "invalid_token"
