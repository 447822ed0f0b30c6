"""API routers package."""
from fastapi import APIRouter

from . import books

router = APIRouter()
router.include_router(books.router, prefix="/books", tags=["books"])
