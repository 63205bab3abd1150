"""Custom exception classes"""
from fastapi import HTTPException, status


class BoardException(HTTPException):
    """Base exception for the project board API"""
    pass


class NotFoundException(BoardException):
    """Raised when a project or admin request id does not exist"""
    def __init__(self, detail: str = "Not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail
        )


class ProjectNotFoundException(NotFoundException):
    def __init__(self, project_id: str):
        super().__init__(detail=f"Project {project_id} not found")


class RequestNotFoundException(NotFoundException):
    def __init__(self, request_id: str):
        super().__init__(detail=f"Request {request_id} not found")


class UnauthorizedException(BoardException):
    """Raised when the bearer token or the credentials are missing or invalid"""
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(BoardException):
    """Raised when an authenticated identity is not an approved admin"""
    def __init__(self, detail: str = "Admin access not approved"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class UpstreamAuthException(BoardException):
    """Raised when the auth provider rejects an account creation"""
    def __init__(self, detail: str = "Failed to create user account"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )


class AccountCreationException(UpstreamAuthException):
    pass


class InternalErrorException(BoardException):
    """Unexpected store or provider failure; the cause is logged, not returned"""
    def __init__(self, detail: str = "Internal error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail
        )
