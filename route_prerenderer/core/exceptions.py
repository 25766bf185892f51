"""
Custom exception classes for the route prerenderer.
"""
from typing import Optional


class PrerendererError(Exception):
    """
    Base class for all custom exceptions in the route prerenderer.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Configuration Related Exceptions ---
class ConfigurationError(PrerendererError):
    """
    Raised for invalid renderer options, e.g. an unknown option name or
    conflicting readiness settings.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Component Related Exceptions ---
class ComponentError(PrerendererError):
    """
    A general base class for errors originating from within a specific component.

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class RendererError(ComponentError):
    """Raised for errors specific to the Renderer component (lifecycle misuse, page work)."""
    def __init__(self, message: str):
        super().__init__(component_name="Renderer", message=message)


class InitializationError(RendererError):
    """Raised when the browser engine cannot be started or launched."""
    def __init__(self, message: str):
        super().__init__(message)


class NavigationError(RendererError):
    """
    Raised when rendering a single route fails. Aborts the whole batch.

    Attributes:
        route (Optional[str]): The route whose page work failed.
    """
    def __init__(self, message: str, route: Optional[str] = None):
        super().__init__(message)
        self.route = route
