"""
Renders application routes to static HTML with a headless Playwright browser.

This module provides the `RouteRenderer` class. It launches one browser,
opens an isolated page per route (bounded by `max_concurrent_routes`),
navigates to the host's local server, waits until the page is ready according
to the configured `Readiness`, and captures HTML plus a screenshot.

Typical use by a prerendering host:

    async with RouteRenderer(RenderOptions.from_dict(host_options)) as renderer:
        results = await renderer.render_routes(["/", "/about"], ServerInfo(port=3000))
"""
import asyncio
import sys
import time
from enum import Enum
from typing import List, Optional, Sequence

from playwright.async_api import async_playwright, Playwright, Browser, Page

from route_prerenderer.components.renderer.interception import RequestFilter, ROUTE_PATTERN
from route_prerenderer.components.renderer.limiter import ConcurrencyLimiter
from route_prerenderer.components.renderer.options import (
    ReadinessStrategy,
    RenderOptions,
    RenderResult,
    ServerInfo,
)
from route_prerenderer.components.renderer import scripts
from route_prerenderer.core.exceptions import InitializationError, NavigationError, RendererError
from route_prerenderer.core.logger import get_logger

logger = get_logger(__name__)

# Navigation always waits for network idle and never times out.
FORCED_WAIT_UNTIL = "networkidle"
FORCED_NAVIGATION_TIMEOUT = 0


class RendererState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    RENDERING = "rendering"
    DESTROYED = "destroyed"


class RouteRenderer:
    """
    Browser-backed renderer for a list of routes.

    The renderer owns a single Playwright browser from `initialize()` until
    `destroy()`. Each route gets its own page; pages share nothing else.
    It can also be used as an async context manager.

    Attributes:
        options (RenderOptions): Frozen renderer configuration.
        playwright (Optional[Playwright]): The Playwright engine instance.
        browser (Optional[Browser]): The launched browser, shared by all route tasks.
        state (RendererState): Lifecycle state.
    """

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or RenderOptions()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.state = RendererState.UNINITIALIZED
        logger.info(
            f"RouteRenderer configured: browser={self.options.browser_type}, "
            f"max_concurrent_routes={self.options.max_concurrent_routes}, "
            f"readiness={self.options.readiness.strategy.value}"
        )

    async def __aenter__(self) -> 'RouteRenderer':
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.destroy()

    async def initialize(self) -> Browser:
        """
        Starts Playwright and launches the configured browser.

        On Linux the sandbox-disabling flags are added to the launch arguments
        (see `RenderOptions.launch_args`). There is no retry.

        Returns:
            Browser: The live browser handle.

        Raises:
            RendererError: If the renderer was already initialized or destroyed.
            InitializationError: If Playwright fails to start or the browser fails to launch.
        """
        if self.state is not RendererState.UNINITIALIZED:
            raise RendererError(f"Cannot initialize a renderer in state '{self.state.value}'.")

        launch_args = list(self.options.launch_args(sys.platform))
        logger.debug(f"Launching {self.options.browser_type} with args: {launch_args}")
        try:
            self.playwright = await async_playwright().start()
            launcher = getattr(self.playwright, self.options.browser_type)
            self.browser = await launcher.launch(headless=self.options.headless, args=launch_args)
        except Exception as e:
            logger.error(f"Unable to start Playwright browser {self.options.browser_type}: {e}", exc_info=True)
            if self.playwright:
                try:
                    await self.playwright.stop()
                except Exception as stop_e:
                    logger.error(f"Error stopping Playwright after failed launch: {stop_e}", exc_info=True)
                self.playwright = None
            raise InitializationError(f"Failed to launch browser {self.options.browser_type}: {e}") from e

        self.state = RendererState.INITIALIZED
        logger.info(f"{self.options.browser_type} browser launched successfully.")
        return self.browser

    async def render_routes(self, routes: Sequence[str], server_info: ServerInfo) -> List[RenderResult]:
        """
        Renders every route and returns the results in input order.

        Routes are rendered concurrently, at most `max_concurrent_routes` at a
        time (0 means all at once). The first failing route aborts the call;
        no partial results are returned.

        Args:
            routes (Sequence[str]): Paths such as "/" or "/about".
            server_info (ServerInfo): The host's local server; each route is loaded
                from `server_info.url_for(route)`.

        Returns:
            List[RenderResult]: One result per route, in the order given.

        Raises:
            RendererError: If the renderer is not initialized (or already destroyed).
            NavigationError: If any route's page work fails.
        """
        if self.state is not RendererState.INITIALIZED or not self.browser:
            logger.error(f"render_routes called in state '{self.state.value}'.")
            raise RendererError(
                f"Renderer is not ready (state '{self.state.value}'). Call initialize() before render_routes()."
            )

        limiter = ConcurrencyLimiter(self.options.max_concurrent_routes)
        self.state = RendererState.RENDERING
        try:
            results = await asyncio.gather(
                *(limiter.run(self._render_route, route, server_info) for route in routes)
            )
        finally:
            self.state = RendererState.INITIALIZED
        return list(results)

    async def _render_route(self, route: str, server_info: ServerInfo) -> RenderResult:
        page: Optional[Page] = None
        try:
            page = await self.browser.new_page()
            await self._prepare_page(page, route, server_info)

            navigation_options = dict(self.options.navigation_options)
            navigation_options["wait_until"] = FORCED_WAIT_UNTIL
            navigation_options["timeout"] = FORCED_NAVIGATION_TIMEOUT

            logger.info(f"Route started: {route}")
            time_start = time.monotonic()
            await page.goto(server_info.url_for(route), **navigation_options)

            selector = self.options.render_after_element_exists
            if selector:
                await page.wait_for_selector(selector, state="attached", timeout=0)

            rendered = await page.evaluate(scripts.WAIT_FOR_RENDER, self.options.readiness.script_arg())
            logger.info(f"Route done: {route} - {time.monotonic() - time_start:.3f}s")

            resolved_route = await page.evaluate(scripts.LOCATION_PATHNAME)
            if isinstance(rendered, str) and rendered:
                html = rendered
            else:
                html = await page.content()
            screenshot = await page.screenshot()

            return RenderResult(
                original_route=route,
                route=resolved_route,
                html=html,
                screenshot=screenshot,
            )
        except Exception as e:
            logger.error(f"Failed to render route '{route}': {e}", exc_info=True)
            raise NavigationError(f"Failed to render route '{route}': {e}", route=route) from e
        finally:
            if page:
                try:
                    await page.close()
                    logger.debug(f"Page for route {route} closed.")
                except Exception as e_close:
                    logger.error(f"Error closing page for route '{route}': {e_close}", exc_info=True)

    async def _prepare_page(self, page: Page, route: str, server_info: ServerInfo) -> None:
        """Hooks that must be in place before navigation, in this order."""
        options = self.options

        if options.console_handler:
            handler = options.console_handler
            page.on("console", lambda message: handler(route, message))

        if options.inject is not None:
            await page.add_init_script(scripts.injection_script(options.inject_property, options.inject))

        if options.viewport:
            await page.set_viewport_size(options.viewport.as_dict())

        request_filter = RequestFilter(
            server_info.base_url,
            options.allowed_urls,
            options.skip_third_party_requests,
        )
        await page.route(ROUTE_PATTERN, request_filter)

        # The event may fire before WAIT_FOR_RENDER attaches its listener.
        if options.readiness.strategy is ReadinessStrategy.DOCUMENT_EVENT:
            await page.add_init_script(scripts.document_event_flag_script(options.readiness.event))

    async def destroy(self) -> None:
        """
        Closes the browser and stops Playwright.

        Raises:
            RendererError: If the renderer was never initialized.
        """
        if self.state is RendererState.UNINITIALIZED:
            raise RendererError("Cannot destroy a renderer that was never initialized.")
        if self.state is RendererState.DESTROYED:
            logger.debug("destroy() called on an already destroyed renderer.")
            return

        self.state = RendererState.DESTROYED
        try:
            if self.browser:
                await self.browser.close()
                logger.info("Browser closed successfully.")
        finally:
            self.browser = None
            if self.playwright:
                await self.playwright.stop()
                logger.info("Playwright stopped successfully.")
            self.playwright = None
