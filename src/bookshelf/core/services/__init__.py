from .book_service import BookService
from .cover_storage import CoverStorageService
from .database.db_session import DbSessionService
from .jwt import JwtGeneratorService, JwtVerificationService

__all__ = [
    "BookService",
    "CoverStorageService",
    "DbSessionService",
    "JwtGeneratorService",
    "JwtVerificationService",
]
