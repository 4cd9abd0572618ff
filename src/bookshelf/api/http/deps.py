"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.bookshelf.api.http.app_data import ApplicationDependencies
from src.bookshelf.core.services import (
    BookService,
    CoverStorageService,
    JwtVerificationService,
)


def _app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a request-scoped session; uncommitted work is discarded on close."""
    session = _app_dependencies(request).database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_cover_storage_service(request: Request) -> CoverStorageService:
    """Get the cover storage service instance."""
    return _app_dependencies(request).cover_storage_service


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    return _app_dependencies(request).jwt_verify_service


def get_book_service(
    session: Session = Depends(get_db_session),
    cover_storage: CoverStorageService = Depends(get_cover_storage_service),
) -> BookService:
    return BookService(session, cover_storage)


def get_current_user_id(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> str:
    """Authenticate the request using a Bearer token and return the caller's user id."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing Bearer token")

    token = auth_header.split(" ", 1)[1]
    claims = jwt_verify.verify_jwt(token)

    request.state.claims = claims
    return claims.user_id
