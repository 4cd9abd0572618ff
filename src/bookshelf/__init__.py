"""Bookshelf catalog API.

Paginated listing, title search and owner-gated create/update/delete of
books, with cover images downloaded from a caller-supplied URL and stored
next to the service.
"""

__version__ = "0.1.0"
