from sqlmodel import Session

from src.bookshelf.entities.service.book import Book, BookRepository

# Smallest byte string that starts like a PNG; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(64))


def add_book(session: Session, user_id: str, category_id: int, title: str, **fields) -> Book:
    """Insert and commit a book directly through the repository."""
    book = BookRepository(session).create(
        Book(
            title=title,
            description=fields.pop("description", f"About {title}"),
            content=fields.pop("content", f"Text of {title}"),
            user_id=user_id,
            category_id=category_id,
            **fields,
        )
    )
    session.commit()
    return book
