"""Docker integration custom exceptions."""

from __future__ import annotations


class DockerError(Exception):
    """Base exception for Docker operations.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the Docker engine (if applicable).
        resource_type: Type of resource involved (e.g., "container", "image").
        resource_id: Id or name of the resource involved.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        """Initialize DockerError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the Docker engine.
            resource_type: Type of resource involved.
            resource_id: Id or name of the resource involved.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.resource_type = resource_type
        self.resource_id = resource_id

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.resource_type and self.resource_id:
            parts.append(f"[{self.resource_type}/{self.resource_id}]")
        return " ".join(parts)


class DockerConnectionError(DockerError):
    """Exception raised when the Docker engine cannot be reached.

    This includes a missing socket, refused connections and bad endpoints.
    """

    def __init__(
        self,
        message: str = "Failed to connect to the Docker engine",
        original_error: Exception | None = None,
    ) -> None:
        """Initialize DockerConnectionError.

        Args:
            message: Human-readable error message.
            original_error: The original exception that caused this error.
        """
        super().__init__(message=message)
        self.original_error = original_error


class DockerNotFoundError(DockerError):
    """Exception raised when a container, image, volume or network is gone (404)."""

    def __init__(
        self,
        message: str = "Docker resource not found",
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=404,
            resource_type=resource_type,
            resource_id=resource_id,
        )


class DockerConflictError(DockerError):
    """Exception raised when a resource is in use or in the wrong state (409).

    Typical causes: removing a running container without force, removing an
    image that has dependent children, removing a volume still mounted.
    """

    def __init__(
        self,
        message: str = "Docker resource conflict",
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            resource_type=resource_type,
            resource_id=resource_id,
        )


class DockerAPIError(DockerError):
    """Exception raised for any other engine error response."""
