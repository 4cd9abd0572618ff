import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import JoseError, jwt
from fastapi import HTTPException

from src.bookshelf.runtime.context import get_config


class JwtGeneratorService:
    """Service for generating JWT tokens for API authentication."""

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int = 3600,
        algorithm: str = "HS256",
        secret: str | None = None,
    ) -> str:
        """Generate a signed JWT for ``subject`` using authlib.

        Args:
            subject: Subject (sub) claim, the user id
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime in seconds (default: 1 hour)
            algorithm: Signing algorithm (default: HS256)
            secret: Optional signing secret. If None, the configured secret is used.

        Returns:
            Signed JWT token string

        Raises:
            HTTPException: If the secret is missing or the algorithm is not allowed
        """
        cfg = get_config().jwt
        secret = secret or cfg.secret
        if not secret:
            raise HTTPException(status_code=500, detail="JWT signing secret not configured")

        if algorithm not in cfg.allowed_algorithms:
            raise HTTPException(status_code=500, detail=f"Algorithm {algorithm} not allowed")

        now = int(time.time())
        payload = {
            "iss": cfg.issuer,
            "sub": subject,
            "aud": cfg.audiences[0] if len(cfg.audiences) == 1 else cfg.audiences,
            "exp": now + expires_in_seconds,
            "iat": now,
            "nbf": now,
            "jti": generate_token(16),
        }
        if claims:
            payload.update(
                {k: v for k, v in claims.items() if k not in {"iss", "sub", "aud", "exp", "iat", "nbf", "jti"}}
            )

        try:
            token = jwt.encode({"alg": algorithm, "typ": "JWT"}, payload, secret)
        except JoseError as e:
            raise HTTPException(
                status_code=500, detail=f"JWT encoding failed: {str(e)}"
            ) from e

        return token.decode() if isinstance(token, bytes) else token
