"""
Custom exception hierarchy for the service graph toolkit.
"""

from typing import Any


class ServiceGraphError(Exception):
    """Base exception for all service graph toolkit errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        """Initialize with message and optional context.

        Args:
            message: Error message
            context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


# Traffic graph exceptions
class GraphError(ServiceGraphError):
    """Base exception for traffic graph operations."""

    pass


class GraphStructureError(GraphError):
    """Traffic graph is structurally invalid (e.g. dangling edge)."""

    pass


class GraphLoadError(GraphError):
    """Traffic graph could not be read or parsed."""

    pass


# Configuration exceptions
class ConfigurationError(ServiceGraphError):
    """Invalid graph options."""

    pass


# Metadata exceptions
class MetadataError(ServiceGraphError):
    """Metadata value has an unsupported shape."""

    pass


# Rendering exceptions
class RenderError(ServiceGraphError):
    """Error occurred while writing an output document."""

    pass


# Utility functions for error handling
def wrap_external_error(
    error: Exception, context: dict[str, Any] | None = None
) -> ServiceGraphError:
    """Wrap external exceptions in our custom exception hierarchy.

    Args:
        error: External exception to wrap
        context: Additional context information

    Returns:
        Appropriate ServiceGraphError subclass
    """
    error_message = str(error)
    error_context = context or {}
    error_context["original_error"] = type(error).__name__

    if isinstance(error, FileNotFoundError):
        return GraphLoadError(f"File not found: {error_message}", error_context)

    elif isinstance(error, PermissionError):
        return ServiceGraphError(f"Permission denied: {error_message}", error_context)

    elif isinstance(error, ValueError | TypeError):
        return GraphLoadError(f"Data validation error: {error_message}", error_context)

    elif isinstance(error, OSError):
        return RenderError(f"I/O error: {error_message}", error_context)

    else:
        # Generic wrapper for unknown errors
        return ServiceGraphError(f"Unexpected error: {error_message}", error_context)


def create_error_context(**kwargs) -> dict[str, Any]:
    """Create error context dictionary with standardized keys.

    Args:
        **kwargs: Context key-value pairs

    Returns:
        Context dictionary
    """
    context = {}

    for key, value in kwargs.items():
        if value is not None:
            context[key] = value

    return context
