"""Core infrastructure components."""
from .exceptions import (
    AppException,
    InvalidInputError,
    NotFoundError,
    RankingServiceError,
)

__all__ = [
    "AppException",
    "InvalidInputError",
    "NotFoundError",
    "RankingServiceError",
]
