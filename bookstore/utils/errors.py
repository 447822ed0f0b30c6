"""Error kinds raised by the book catalog and translated at the HTTP boundary."""
from typing import List, Sequence, Union

from fastapi import status


class BookstoreError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Union[str, List[str]]):
        super().__init__(message)
        self.message = message


class BookValidationError(BookstoreError):
    """Payload failed the book schema; nothing was written."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, violations: Sequence[object]):
        self.violations = list(violations)
        super().__init__([str(v) for v in self.violations])


class BookNotFoundError(BookstoreError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"There is no book with an isbn '{isbn}'")


class BookConflictError(BookstoreError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"A book with isbn '{isbn}' already exists")
