"""Tests for token generation and verification."""

import time

import pytest
from authlib.jose import jwt
from fastapi import HTTPException

from src.bookshelf.core.services.jwt import JwtGeneratorService, JwtVerificationService
from src.bookshelf.runtime.config.config_data import ConfigData
from src.bookshelf.runtime.context import with_context

_SECRET = "unit-test-secret"


@pytest.fixture
def jwt_config() -> ConfigData:
    config = ConfigData()
    config.jwt.secret = _SECRET
    config.jwt.issuer = "https://issuer.test"
    config.jwt.audiences = ["bookshelf"]
    return config


@pytest.fixture
def generator() -> JwtGeneratorService:
    return JwtGeneratorService()


@pytest.fixture
def verifier() -> JwtVerificationService:
    return JwtVerificationService()


def _sign(payload: dict, secret: str = _SECRET, alg: str = "HS256") -> str:
    token = jwt.encode({"alg": alg}, payload, secret)
    return token.decode() if isinstance(token, bytes) else token


def _claims(**overrides) -> dict:
    now = int(time.time())
    claims = {
        "iss": "https://issuer.test",
        "sub": "user-alice",
        "aud": "bookshelf",
        "iat": now,
        "exp": now + 300,
    }
    claims.update(overrides)
    return claims


class TestJwtRoundTrip:
    def test_generated_token_verifies(self, jwt_config, generator, verifier):
        with with_context(jwt_config):
            token = generator.generate_jwt("user-alice", claims={"name": "Alice", "role": "reader"})
            claims = verifier.verify_jwt(token)

        assert claims.user_id == "user-alice"
        assert claims.subject == "user-alice"
        assert claims.issuer == "https://issuer.test"
        assert claims.name == "Alice"
        assert claims.custom_claims == {"role": "reader"}
        assert claims.jti

    def test_reserved_claims_cannot_be_overridden(self, jwt_config, generator, verifier):
        with with_context(jwt_config):
            token = generator.generate_jwt("user-alice", claims={"sub": "user-mallory"})
            claims = verifier.verify_jwt(token)

        assert claims.user_id == "user-alice"

    def test_custom_user_id_claim(self, jwt_config, verifier):
        jwt_config.jwt.user_id_claim = "uid"

        with with_context(jwt_config):
            claims = verifier.verify_jwt(_sign(_claims(uid="u-42")))

        assert claims.user_id == "u-42"

    def test_generation_rejects_disallowed_algorithm(self, jwt_config, generator):
        with with_context(jwt_config):
            with pytest.raises(HTTPException) as exc_info:
                generator.generate_jwt("user-alice", algorithm="RS256")

        assert exc_info.value.status_code == 500


class TestJwtRejection:
    @pytest.mark.parametrize(
        "token_factory_args",
        [
            {"payload": _claims(), "secret": "some-other-secret"},
            {"payload": _claims(exp=int(time.time()) - 3600)},
            {"payload": _claims(iss="https://evil.test")},
            {"payload": _claims(aud="someone-else")},
        ],
        ids=["wrong-secret", "expired", "wrong-issuer", "wrong-audience"],
    )
    def test_invalid_tokens_are_unauthorized(self, jwt_config, verifier, token_factory_args):
        token = _sign(**token_factory_args)

        with with_context(jwt_config):
            with pytest.raises(HTTPException) as exc_info:
                verifier.verify_jwt(token)

        assert exc_info.value.status_code == 401

    def test_missing_subject(self, jwt_config, verifier):
        payload = _claims()
        del payload["sub"]

        with with_context(jwt_config):
            with pytest.raises(HTTPException) as exc_info:
                verifier.verify_jwt(_sign(payload))

        assert exc_info.value.status_code == 401

    def test_algorithm_outside_allow_list(self, jwt_config, verifier):
        jwt_config.jwt.allowed_algorithms = ["HS256"]
        token = _sign(_claims(), alg="HS512")

        with with_context(jwt_config):
            with pytest.raises(HTTPException) as exc_info:
                verifier.verify_jwt(token)

        assert exc_info.value.status_code == 401

    def test_garbage_token(self, jwt_config, verifier):
        with with_context(jwt_config):
            with pytest.raises(HTTPException) as exc_info:
                verifier.verify_jwt("a.b.c")

        assert exc_info.value.status_code == 401
