"""
Components sub-package for the route prerenderer.

Re-exports the renderer so hosts can import it from `route_prerenderer.components`.
"""
from .renderer import RouteRenderer, RenderOptions, RenderResult, ServerInfo

__all__ = [
    "RouteRenderer",
    "RenderOptions",
    "RenderResult",
    "ServerInfo",
]
