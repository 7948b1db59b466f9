"""Domain exceptions rendered as the API error envelope."""

from typing import Any


class AppError(Exception):
    """Base exception for business rule violations."""

    code = "SERVER_ERROR"
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Raised when input data is invalid."""

    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Invalid input data"


class UserExistsError(AppError):
    """Email or username is already registered."""

    code = "USER_EXISTS"
    status_code = 409
    default_message = "User with this email or username already exists"


class InvalidCredentialsError(AppError):
    """Unknown email or wrong password; the two are not distinguished."""

    code = "INVALID_CREDENTIALS"
    status_code = 401
    default_message = "Invalid email or password"


class UnauthorizedError(AppError):
    """Missing, malformed or expired access token, or the user is gone."""

    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Not authorized"


class NoTokenError(AppError):
    """Refresh requested without a refresh token."""

    code = "NO_TOKEN"
    status_code = 401
    default_message = "Refresh token is required"


class InvalidTokenError(AppError):
    """Refresh token is forged, expired or no longer the live one."""

    code = "INVALID_TOKEN"
    status_code = 401
    default_message = "Invalid refresh token"


class ForbiddenError(AppError):
    """Authenticated, but the role is not allowed."""

    code = "FORBIDDEN"
    status_code = 403
    default_message = "Not allowed to access this resource"


class NotFoundError(AppError):
    """Missing resource, or one owned by somebody else."""

    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class TaskNotFoundError(NotFoundError):
    """Raised when a task does not exist for the caller."""

    default_message = "Task not found"


class CategoryNotFoundError(NotFoundError):
    """Raised when a category does not exist for the caller."""

    default_message = "Category not found"


class UserNotFoundError(NotFoundError):
    """Raised when a share target does not exist."""

    default_message = "User not found"


class CategoryExistsError(AppError):
    """Category names are unique per user."""

    code = "CATEGORY_EXISTS"
    status_code = 409
    default_message = "Category with this name already exists"


class AlreadySharedError(AppError):
    """Target user already has access to the task."""

    code = "ALREADY_SHARED"
    status_code = 400
    default_message = "Task already shared with this user"


class InvalidTransitionError(AppError):
    """Archived tasks cannot move to another status."""

    code = "INVALID_TRANSITION"
    status_code = 400
    default_message = "Cannot change status from archived"


class DuplicateKeyError(AppError):
    """Unique constraint violation not handled closer to its source."""

    code = "DUPLICATE_KEY"
    status_code = 409
    default_message = "Duplicate field value entered"


class InvalidIdError(AppError):
    """Id is not a well-formed ULID."""

    code = "INVALID_ID"
    status_code = 400
    default_message = "Invalid ID format"
