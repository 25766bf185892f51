"""
route_prerenderer: renders client-side application routes to static HTML
with a headless Playwright browser.
"""
from route_prerenderer.components.renderer import (
    RouteRenderer,
    RendererState,
    RenderOptions,
    Readiness,
    ReadinessStrategy,
    RenderResult,
    ServerInfo,
    Viewport,
)
from route_prerenderer.core.exceptions import (
    PrerendererError,
    ConfigurationError,
    RendererError,
    InitializationError,
    NavigationError,
)

__version__ = "0.1.0"

__all__ = [
    "RouteRenderer",
    "RendererState",
    "RenderOptions",
    "Readiness",
    "ReadinessStrategy",
    "RenderResult",
    "ServerInfo",
    "Viewport",
    "PrerendererError",
    "ConfigurationError",
    "RendererError",
    "InitializationError",
    "NavigationError",
]
