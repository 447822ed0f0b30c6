"""Payload validation for book records.

``validate_book`` never raises on bad input: it returns every violation it
finds so callers decide what to do with them. The service layer turns a
non-empty result into a single ``BookValidationError`` before any write.
"""
from dataclasses import dataclass
from typing import Any, List

from pydantic import ValidationError

from bookstore.models.book_model import BookCreate, BookUpdate


@dataclass(frozen=True)
class Violation:
    field: str
    message: str

    def __str__(self) -> str:
        if not self.field:
            return self.message
        return f"{self.field}: {self.message}"


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc)


def validate_book(payload: Any, require_isbn: bool = True) -> List[Violation]:
    """Check ``payload`` against the closed book schema.

    With ``require_isbn`` (create) the isbn must be present; otherwise
    (update) it is optional. Unknown keys, missing keys and wrongly typed
    values are all reported.
    """
    if not isinstance(payload, dict):
        return [Violation("", "Book payload must be a JSON object")]

    schema = BookCreate if require_isbn else BookUpdate
    try:
        schema.model_validate(payload)
    except ValidationError as exc:
        return [Violation(_field_name(err["loc"]), err["msg"]) for err in exc.errors()]
    return []
