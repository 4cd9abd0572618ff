from dataclasses import dataclass

from src.bookshelf.core.services import (
    CoverStorageService,
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
)


@dataclass
class ApplicationDependencies:
    """Container for application-wide dependencies."""

    database_service: DbSessionService
    cover_storage_service: CoverStorageService
    jwt_verify_service: JwtVerificationService
    jwt_generation_service: JwtGeneratorService
