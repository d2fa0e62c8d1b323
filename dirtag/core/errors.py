"""
Error taxonomy shared by the storage, service and CLI layers.

How errors flow:
1. Repositories turn sqlalchemy IntegrityError into ConstraintViolation
2. Services translate ConstraintViolation / empty lookups into
   NotFoundError, ConflictError, BadRequestError
3. The CLI maps every DirtagError to its exit code and a one-line message
"""


class DirtagError(Exception):
    """
    Base class for all dirtag errors.

    Usage:
        raise DirtagError(
            code="NOT_FOUND",
            message="Tag 'x' not found",
            exit_code=3
        )
    """

    exit_code: int = 1

    def __init__(
        self,
        code: str,
        message: str,
        exit_code: int | None = None,
        details: list[dict] | None = None,
    ):
        self.code = code
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code
        self.details = details
        super().__init__(message)


class NotFoundError(DirtagError):
    """
    Referenced tag or directory does not exist.

    Usage:
        raise NotFoundError("Tag", "frontend")
        # Message: "Tag 'frontend' not found"
    """

    exit_code = 3

    def __init__(self, resource: str, key: int | str):
        self.resource = resource
        self.key = key
        super().__init__(code="NOT_FOUND", message=f"{resource} '{key}' not found")


class ConflictError(DirtagError):
    """
    A unique constraint would be (or was) violated.

    Usage:
        raise ConflictError("Tag", "name", "frontend")
        # Message: "Tag with name='frontend' already exists"
    """

    exit_code = 4

    def __init__(self, resource: str, field: str, value: str):
        self.resource = resource
        super().__init__(
            code="CONFLICT",
            message=f"{resource} with {field}='{value}' already exists",
            details=[{"field": field, "message": f"Value '{value}' is already in use"}],
        )


class BadRequestError(DirtagError):
    """An operation was invoked with input that produces no effective change."""

    exit_code = 5

    def __init__(self, message: str, details: list[dict] | None = None):
        super().__init__(code="BAD_REQUEST", message=message, details=details)


class NoChangesError(BadRequestError):
    """An update request (retag) would leave everything as it is."""

    def __init__(self, message: str = "No changes specified"):
        super().__init__(message)


class InvalidPathError(DirtagError):
    """
    Supplied path does not exist or is not a directory.

    Usage:
        raise InvalidPathError("./missing", "does not exist")
        # Message: "Path ./missing does not exist"
    """

    exit_code = 6

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            code="INVALID_PATH",
            message=f"Path {path} {reason}",
            details=[{"field": "path", "message": reason}],
        )


class ConstraintViolation(DirtagError):
    """Raw storage-level integrity failure (unique or foreign key)."""

    exit_code = 7

    def __init__(self, message: str, orig: Exception | None = None):
        self.orig = orig
        super().__init__(code="CONSTRAINT_VIOLATION", message=message)
