"""
Domain errors raised by the social graph services.

Routes never build HTTP errors for these by hand: the handler registered in
app.main turns any SocialGraphError into a JSON response using its status_code.
"""
from fastapi import status


class SocialGraphError(Exception):
    """Base class for errors that terminate a social graph operation"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SocialGraphError):
    """Malformed input or a request that can never succeed (e.g. befriending yourself)"""
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(SocialGraphError):
    """An edge already exists for the unordered pair"""
    status_code = status.HTTP_409_CONFLICT


class NotFoundError(SocialGraphError):
    """Target user or edge does not resolve for this caller"""
    status_code = status.HTTP_404_NOT_FOUND


class AuthorizationError(SocialGraphError):
    """Caller identity missing or not recognised"""
    status_code = status.HTTP_403_FORBIDDEN
