"""Domain errors raised by the catalog services.

Each error carries the HTTP status it maps to so the API layer can translate
them with a single exception handler.
"""


class CatalogError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CatalogValidationError(CatalogError):
    """Malformed or missing input, including a cover that could not be acquired."""

    status_code = 400


class NotFoundError(CatalogError):
    """A referenced user, category or book does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity.capitalize()} not found")
        self.entity = entity
        self.entity_id = entity_id


class ForbiddenError(CatalogError):
    """The authenticated caller does not own the resource."""

    status_code = 403


class CoverAcquisitionError(Exception):
    """A cover image could not be downloaded and stored.

    ``reason`` is one of ``status``, ``transport`` or ``storage`` and is meant
    for logs only; callers treat every acquisition failure the same way.
    """

    def __init__(self, message: str, *, reason: str, url: str | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.url = url
