"""Book models."""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# Range of the INTEGER columns in schema.sql
INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1


class Book(BaseModel):
    isbn: str
    amazon_url: Optional[str] = None
    author: Optional[str] = None
    language: Optional[str] = None
    pages: Optional[int] = None
    publisher: Optional[str] = None
    title: str
    year: Optional[int] = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_db_record(cls, record) -> "Book":
        """Create Book from a ``books`` row."""
        return cls(**dict(record))


class BookUpdate(BaseModel):
    """Closed schema for a full-record replace.

    ``isbn`` is a recognized field so clients may echo it back, but the
    isbn in the URL decides which row is replaced.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    isbn: Optional[StrictStr] = None
    amazon_url: StrictStr
    author: StrictStr
    language: StrictStr
    pages: StrictInt = Field(..., ge=INT4_MIN, le=INT4_MAX)
    publisher: StrictStr
    title: StrictStr = Field(..., min_length=1)
    year: StrictInt = Field(..., ge=INT4_MIN, le=INT4_MAX)


class BookCreate(BookUpdate):
    isbn: StrictStr = Field(..., min_length=1)


class BookResponse(BaseModel):
    book: Book


class BookListResponse(BaseModel):
    books: List[Book]


class MessageResponse(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    message: Union[str, List[str]]
    status: int


class ErrorResponse(BaseModel):
    error: ErrorDetail
