"""Custom exceptions for Wiki Docs service operations."""


class WikiDocsError(Exception):
    """Base exception for Wiki Docs service errors."""

    pass


class ValidationError(WikiDocsError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(WikiDocsError):
    """Raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateError(WikiDocsError):
    """Raised when attempting to create a duplicate resource."""

    def __init__(self, resource_type: str, field: str, value: str):
        message = f"{resource_type} with {field} '{value}' already exists"
        super().__init__(message)
        self.resource_type = resource_type
        self.field = field
        self.value = value


class DatabaseError(WikiDocsError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class PreconditionError(WikiDocsError):
    """Raised when a business rule forbids the requested operation."""

    pass


class InvalidStatusTransitionError(PreconditionError):
    """Raised when a document status change is not a declared workflow edge."""

    def __init__(self, current: str, target: str):
        message = f"Cannot change document status from '{current}' to '{target}'"
        super().__init__(message)
        self.current = current
        self.target = target


class RemoteTransportError(WikiDocsError):
    """Raised when the repository hosting API fails (auth, rate limit, network)."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.original_error = original_error
