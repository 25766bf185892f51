"""
Renderer component for the route prerenderer.

This sub-package drives a headless browser over a list of application routes
and captures the rendered HTML and a screenshot for each.
"""
from .options import (
    RenderOptions,
    Readiness,
    ReadinessStrategy,
    RenderResult,
    ServerInfo,
    Viewport,
)
from .limiter import ConcurrencyLimiter
from .interception import RequestFilter, is_request_allowed
from .route_renderer import RouteRenderer, RendererState

__all__ = [
    "RouteRenderer",
    "RendererState",
    "RenderOptions",
    "Readiness",
    "ReadinessStrategy",
    "RenderResult",
    "ServerInfo",
    "Viewport",
    "ConcurrencyLimiter",
    "RequestFilter",
    "is_request_allowed",
]
