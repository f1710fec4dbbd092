"""Storage protocols used by the sync engine and the services.

Every call is its own unit of work; callers never get a transaction
spanning several calls.
"""

from typing import Protocol

from moviehub.schemas import Movie, Review


class MovieStore(Protocol):
    """Movie persistence operations."""

    async def find_by_id(self, movie_id: str) -> Movie | None: ...

    async def find_all(self) -> list[Movie]: ...

    async def find_by_external_id(self, external_id: int) -> Movie | None: ...

    async def find_by_title_ignore_case(self, title: str) -> Movie | None: ...

    async def save(self, movie: Movie) -> Movie:
        """Insert or replace; assigns ``id`` when missing."""
        ...

    async def delete_by_id(self, movie_id: str) -> bool: ...


class ReviewStore(Protocol):
    """Review persistence operations."""

    async def find_by_id(self, review_id: str) -> Review | None: ...

    async def find_by_movie_id(self, movie_id: str) -> list[Review]: ...

    async def find_all(self) -> list[Review]: ...

    async def save(self, review: Review) -> Review: ...

    async def delete_by_id(self, review_id: str) -> bool: ...
