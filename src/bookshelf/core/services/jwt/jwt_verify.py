"""JWT verification service."""

from authlib.jose import JoseError, JsonWebToken
from fastapi import HTTPException
from loguru import logger

from src.bookshelf.core.models.session import TokenClaims
from src.bookshelf.runtime.context import get_config

_REGISTERED = {"iss", "sub", "aud", "exp", "iat", "nbf", "jti", "email", "name"}


class JwtVerificationService:
    """Verifies bearer tokens signed with the configured shared secret."""

    def verify_jwt(self, token: str) -> TokenClaims:
        cfg = get_config().jwt

        if not cfg.secret:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        claims_options = {
            "iss": {"essential": True, "value": cfg.issuer},
            "aud": {"essential": True, "values": cfg.audiences},
            "exp": {"essential": True},
            "sub": {"essential": True},
        }

        try:
            # Restricting the decoder to the allow-list rejects any other "alg" header
            decoder = JsonWebToken(cfg.allowed_algorithms)
            claims = decoder.decode(token, cfg.secret, claims_options=claims_options)
            claims.validate(leeway=cfg.clock_skew)
        except (JoseError, ValueError) as exc:
            logger.debug("JWT rejected: {}", exc)
            raise HTTPException(status_code=401, detail=f"JWT error: {exc}") from exc

        user_id = claims.get(cfg.user_id_claim)
        if not user_id:
            raise HTTPException(
                status_code=401, detail=f"JWT missing {cfg.user_id_claim} claim"
            )

        return TokenClaims(
            raw_token=token,
            issuer=claims["iss"],
            subject=claims["sub"],
            user_id=str(user_id),
            audience=claims["aud"],
            expires_at=int(claims["exp"]),
            issued_at=claims.get("iat"),
            jti=claims.get("jti"),
            email=claims.get("email"),
            name=claims.get("name"),
            custom_claims={k: v for k, v in claims.items() if k not in _REGISTERED},
        )
