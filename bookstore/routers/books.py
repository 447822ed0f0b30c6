"""Book endpoints."""
from typing import Any, Dict

from fastapi import APIRouter, Body, status

from bookstore.models.book_model import BookListResponse, BookResponse, ErrorResponse, MessageResponse
from bookstore.services import book_service

router = APIRouter()

INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid book payload"}}
NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "No book with that isbn"}}
CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "isbn already exists"}}


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**INVALID, **CONFLICT},
)
async def create_book(payload: Dict[str, Any] = Body(...)):
    """Create a book from a full record, isbn included."""
    book = await book_service.create_book(payload)
    return BookResponse(book=book)


@router.get("", response_model=BookListResponse)
async def list_books():
    """List every book in the catalog."""
    return BookListResponse(books=await book_service.list_books())


@router.get("/{isbn}", response_model=BookResponse, responses=NOT_FOUND)
async def get_book(isbn: str):
    return BookResponse(book=await book_service.get_book(isbn))


@router.put("/{isbn}", response_model=BookResponse, responses={**INVALID, **NOT_FOUND})
async def update_book(isbn: str, payload: Dict[str, Any] = Body(...)):
    """Replace the book at ``isbn``. Extra fields reject the whole update."""
    book = await book_service.update_book(isbn, payload)
    return BookResponse(book=book)


@router.delete("/{isbn}", response_model=MessageResponse, responses=NOT_FOUND)
async def delete_book(isbn: str):
    await book_service.delete_book(isbn)
    return MessageResponse(message="Book deleted")
