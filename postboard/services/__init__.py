from postboard.services.post_client import (
    BadRequestError,
    HttpStatusError,
    PostService,
    PostServiceError,
    TransportError,
    UnauthorizedError,
)

__all__ = [
    "BadRequestError",
    "HttpStatusError",
    "PostService",
    "PostServiceError",
    "TransportError",
    "UnauthorizedError",
]
