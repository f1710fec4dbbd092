"""Service-layer exceptions.

The API maps each of these to an HTTP status and a JSON error body.
"""


class ServiceError(Exception):
    """Base exception for service errors."""

    pass


class MovieNotFoundError(ServiceError):
    """Raised when a movie id or title does not resolve."""

    pass


class ReviewNotFoundError(ServiceError):
    """Raised when a review id does not resolve."""

    pass


class InvalidRatingError(ServiceError):
    """Raised when a rating is outside 1-5. Checked before any write."""

    pass


class ReviewNotAllowedError(ServiceError):
    """Raised when reviewing a movie that was not released when written."""

    pass


class AggregateUpdateError(ServiceError):
    """Raised when the average rating could not be recomputed or written.

    Attributes:
        movie_id: Movie whose aggregate is stale.
    """

    def __init__(self, movie_id: str, cause: BaseException) -> None:
        self.movie_id = movie_id
        super().__init__(f"Could not update average rating of movie {movie_id}: {cause}")
