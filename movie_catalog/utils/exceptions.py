"""
Catalog error taxonomy.

Services raise these; ``movie_catalog.main`` maps them to HTTP responses.
"""
from fastapi import status


class CatalogError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Malformed filter, pagination or payload input"""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(CatalogError):
    """Lookup by id with no matching row"""

    status_code = status.HTTP_404_NOT_FOUND


class QueryExecutionError(CatalogError):
    """Store round-trip failed (unreachable database, bad SQL, ...)"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
