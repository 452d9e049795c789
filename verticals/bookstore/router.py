"""Book API router: catalog CRUD behind bearer authentication.

Every route logs on entry, on each failure branch and on success. Store
failures are caught here and turned into a 500 whose message only carries
the underlying error when the service runs in debug mode.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from api.auth import require_bearer_token
from core.config import settings
from verticals.bookstore.models.schemas import BookCreate, BookResponse, BookUpdate
from verticals.bookstore.repository import BookRepository, get_book_repository

logger = structlog.get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_bearer_token)])


def _server_error(action: str, exc: Exception) -> HTTPException:
    detail = f"An error occurred while {action}."
    if settings.app.debug:
        detail = f"{detail} {exc}"
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


# ============================================================================
# Read endpoints
# ============================================================================

@router.get("", response_model=list[BookResponse])
async def get_books(repo: BookRepository = Depends(get_book_repository)):
    """List every book in the catalog."""
    logger.info("Fetching all books")
    try:
        books = await repo.get_books()
    except Exception as exc:
        logger.exception("Failed to retrieve books")
        raise _server_error("retrieving the books", exc)

    logger.info("Fetched all books", count=len(books))
    return books


@router.get("/author/{author_name}", response_model=list[BookResponse])
async def get_books_by_author(
    author_name: str,
    repo: BookRepository = Depends(get_book_repository),
):
    """List books written by ``author_name`` (exact match)."""
    logger.info("Fetching books by author", author=author_name)
    try:
        books = await repo.get_books_by_author(author_name)
    except Exception as exc:
        logger.exception("Failed to retrieve books by author", author=author_name)
        raise _server_error("retrieving books by the author", exc)

    if not books:
        logger.warning("No books found for author", author=author_name)
        raise HTTPException(status_code=404, detail="No books found for this author")

    logger.info("Fetched books by author", author=author_name, count=len(books))
    return books


@router.get("/category/{category}", response_model=list[BookResponse])
async def get_books_by_category(
    category: str,
    repo: BookRepository = Depends(get_book_repository),
):
    """List books in ``category`` (exact match)."""
    logger.info("Fetching books by category", category=category)
    try:
        books = await repo.get_books_by_category(category)
    except Exception as exc:
        logger.exception("Failed to retrieve books by category", category=category)
        raise _server_error("retrieving books by category", exc)

    if not books:
        logger.warning("No books found in category", category=category)
        raise HTTPException(status_code=404, detail="No books found in this category")

    logger.info("Fetched books by category", category=category, count=len(books))
    return books


@router.get("/{book_id}", response_model=BookResponse)
async def get_book_by_id(
    book_id: int,
    repo: BookRepository = Depends(get_book_repository),
):
    """Get a single book."""
    logger.info("Fetching book", book_id=book_id)
    try:
        book = await repo.get_book_by_id(book_id)
    except Exception as exc:
        logger.exception("Failed to retrieve book", book_id=book_id)
        raise _server_error("retrieving the book", exc)

    if book is None:
        logger.warning("Book not found", book_id=book_id)
        raise HTTPException(status_code=404, detail="Book not found")

    logger.info("Fetched book", book_id=book_id)
    return book


# ============================================================================
# Write endpoints
# ============================================================================

@router.post("", response_model=BookResponse, status_code=201)
async def create_book(
    request: BookCreate,
    http_request: Request,
    response: Response,
    repo: BookRepository = Depends(get_book_repository),
):
    """Add a new book to the catalog."""
    logger.info("Creating book", title=request.title)
    try:
        book = await repo.create_book(request.model_dump(exclude={"id"}))
    except Exception as exc:
        logger.exception("Failed to create book")
        raise _server_error("creating the book", exc)

    response.headers["Location"] = str(
        http_request.url_for("get_book_by_id", book_id=book["id"])
    )
    logger.info("Created book", book_id=book["id"])
    return book


@router.put("/{book_id}", status_code=204)
async def update_book(
    book_id: int,
    request: BookUpdate,
    repo: BookRepository = Depends(get_book_repository),
):
    """Replace every field of an existing book."""
    logger.info("Updating book", book_id=book_id)
    if request.id is not None and request.id != book_id:
        logger.warning("Path id does not match body id", book_id=book_id, body_id=request.id)
        raise HTTPException(
            status_code=400,
            detail="The ID in the URL does not match the ID in the book object.",
        )

    try:
        exists = await repo.book_exists(book_id)
        if exists:
            await repo.update_book(book_id, request.model_dump(exclude={"id"}))
    except Exception as exc:
        logger.exception("Failed to update book", book_id=book_id)
        raise _server_error("updating the book", exc)

    if not exists:
        logger.warning("Book not found", book_id=book_id)
        raise HTTPException(
            status_code=404, detail="The book with the specified ID does not exist."
        )

    logger.info("Updated book", book_id=book_id)
    return Response(status_code=204)


@router.delete("/{book_id}", status_code=204)
async def delete_book(
    book_id: int,
    repo: BookRepository = Depends(get_book_repository),
):
    """Remove a book from the catalog."""
    logger.info("Deleting book", book_id=book_id)
    try:
        exists = await repo.book_exists(book_id)
        if exists:
            await repo.delete_book(book_id)
    except Exception as exc:
        logger.exception("Failed to delete book", book_id=book_id)
        raise _server_error("deleting the book", exc)

    if not exists:
        logger.warning("Book not found", book_id=book_id)
        raise HTTPException(status_code=404, detail="Book not found")

    logger.info("Deleted book", book_id=book_id)
    return Response(status_code=204)
