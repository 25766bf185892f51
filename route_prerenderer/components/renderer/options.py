"""
Option and result types for the route renderer.

`RenderOptions` is built once (directly, from a host-supplied mapping, or from
the `renderer` section of the configuration) and is frozen afterwards.
`Readiness` is a tagged variant: exactly one strategy (immediate, fixed delay,
document event) decides when a page is ready to be captured.
"""
import sys
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TYPE_CHECKING

from route_prerenderer.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from playwright.async_api import ConsoleMessage
    from route_prerenderer.core.config import ConfigurationManager

DEFAULT_INJECT_PROPERTY = "__PRERENDER_INJECTED"
SUPPORTED_BROWSER_TYPES = ("chromium", "firefox", "webkit")
SANDBOX_WORKAROUND_ARGS = ("--no-sandbox", "--disable-setuid-sandbox")

ConsoleHandler = Callable[[str, "ConsoleMessage"], None]


class ReadinessStrategy(Enum):
    IMMEDIATE = "immediate"
    FIXED_DELAY = "fixed_delay"
    DOCUMENT_EVENT = "document_event"


@dataclass(frozen=True)
class Readiness:
    """
    When a navigated page counts as ready.

    Only the parameter belonging to `strategy` is set; use the classmethod
    constructors rather than building instances by hand. Waiting for an
    element is independent of this and lives on
    `RenderOptions.render_after_element_exists`.
    """
    strategy: ReadinessStrategy = ReadinessStrategy.IMMEDIATE
    event: Optional[str] = None
    delay_ms: Optional[int] = None

    def __post_init__(self):
        if self.strategy is ReadinessStrategy.DOCUMENT_EVENT:
            if not isinstance(self.event, str) or not self.event:
                raise ConfigurationError("renderAfterDocumentEvent must be a non-empty event name.")
        elif self.strategy is ReadinessStrategy.FIXED_DELAY:
            if isinstance(self.delay_ms, bool) or not isinstance(self.delay_ms, int) or self.delay_ms <= 0:
                raise ConfigurationError("renderAfterTime must be a positive number of milliseconds.")

    @classmethod
    def immediate(cls) -> 'Readiness':
        return cls()

    @classmethod
    def after_time(cls, delay_ms: int) -> 'Readiness':
        return cls(strategy=ReadinessStrategy.FIXED_DELAY, delay_ms=delay_ms)

    @classmethod
    def after_document_event(cls, event: str) -> 'Readiness':
        return cls(strategy=ReadinessStrategy.DOCUMENT_EVENT, event=event)

    def script_arg(self) -> Dict[str, Any]:
        """Argument passed to the in-page readiness wait."""
        return {"event": self.event, "delayMs": self.delay_ms}


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int

    def as_dict(self) -> Dict[str, int]:
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class ServerInfo:
    """Where the host's local web server listens."""
    port: int
    host: str = "localhost"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def url_for(self, route: str) -> str:
        return f"{self.base_url}{route}"


@dataclass(frozen=True)
class RenderResult:
    """
    Output for one route.

    Attributes:
        original_route (str): The route as supplied by the caller.
        route (str): `window.location.pathname` after navigation (differs on redirects).
        html (str): Captured document HTML.
        screenshot (bytes): PNG screenshot of the viewport.
    """
    original_route: str
    route: str
    html: str
    screenshot: bytes


# Host option names (camelCase) mapped to RenderOptions fields.
OPTION_ALIASES = {
    "maxConcurrentRoutes": "max_concurrent_routes",
    "args": "args",
    "browserType": "browser_type",
    "headless": "headless",
    "viewport": "viewport",
    "allowedUrls": "allowed_urls",
    "skipThirdPartyRequests": "skip_third_party_requests",
    "inject": "inject",
    "injectProperty": "inject_property",
    "renderAfterElementExists": "render_after_element_exists",
    "navigationOptions": "navigation_options",
    "consoleHandler": "console_handler",
}

READINESS_KEYS = {
    "renderAfterDocumentEvent": Readiness.after_document_event,
    "render_after_document_event": Readiness.after_document_event,
    "renderAfterTime": Readiness.after_time,
    "render_after_time": Readiness.after_time,
}

# Navigation settings the renderer always overrides; any host value is dropped.
FORCED_NAVIGATION_KEYS = ("waituntil", "waitUntil", "wait_until", "timeout")
# Remaining `page.goto` keyword arguments a host may pass through.
NAVIGATION_KEYS = ("referer",)


@dataclass(frozen=True)
class RenderOptions:
    """
    Renderer configuration. Immutable once built.

    A `max_concurrent_routes` of 0 means every route starts at once.
    `render_after_element_exists` is waited for after navigation and before
    `readiness` is resolved, so it combines with any readiness strategy.
    """
    max_concurrent_routes: int = 0
    args: Tuple[str, ...] = ()
    browser_type: str = "chromium"
    headless: bool = True
    viewport: Optional[Viewport] = None
    allowed_urls: Tuple[str, ...] = ()
    skip_third_party_requests: bool = False
    inject: Any = None
    inject_property: Optional[str] = None
    readiness: Readiness = field(default_factory=Readiness.immediate)
    render_after_element_exists: Optional[str] = None
    navigation_options: Mapping[str, Any] = field(default_factory=dict)
    console_handler: Optional[ConsoleHandler] = None

    def __post_init__(self):
        if isinstance(self.max_concurrent_routes, bool) or not isinstance(self.max_concurrent_routes, int):
            raise ConfigurationError("maxConcurrentRoutes must be an integer.")
        if self.max_concurrent_routes < 0:
            raise ConfigurationError("maxConcurrentRoutes cannot be negative (use 0 for no limit).")
        if self.browser_type not in SUPPORTED_BROWSER_TYPES:
            raise ConfigurationError(
                f"Unsupported browser type: {self.browser_type}. Must be 'chromium', 'firefox', or 'webkit'."
            )
        if isinstance(self.viewport, Mapping):
            object.__setattr__(self, "viewport", _viewport_from(self.viewport))
        # Lists from YAML or the host become tuples.
        object.__setattr__(self, "args", tuple(self.args or ()))
        object.__setattr__(self, "allowed_urls", tuple(self.allowed_urls or ()))
        object.__setattr__(self, "navigation_options", _navigation_options_from(self.navigation_options))
        if self.render_after_element_exists is not None and not isinstance(self.render_after_element_exists, str):
            raise ConfigurationError("renderAfterElementExists must be a CSS selector string.")
        if not self.render_after_element_exists:
            object.__setattr__(self, "render_after_element_exists", None)
        if self.inject is not None and not self.inject_property:
            object.__setattr__(self, "inject_property", DEFAULT_INJECT_PROPERTY)
        if self.console_handler is not None and not callable(self.console_handler):
            raise ConfigurationError("consoleHandler must be callable.")

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> 'RenderOptions':
        """
        Builds options from a host mapping.

        Accepts the host's camelCase names (`maxConcurrentRoutes`, `renderAfterTime`, ...)
        as well as the snake_case field names. Empty readiness values (0, "", None)
        count as not set.

        Raises:
            ConfigurationError: On unknown keys, or when both a document event and
                a delay are set.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        readiness_keys = []
        for key, value in (options or {}).items():
            if key in READINESS_KEYS:
                if value:
                    readiness_keys.append(key)
                continue
            name = OPTION_ALIASES.get(key, key)
            if name not in known or name == "readiness":
                raise ConfigurationError(f"Unknown renderer option: {key}")
            if value is not None:
                kwargs[name] = value

        if len(readiness_keys) > 1:
            raise ConfigurationError(
                f"Readiness options are mutually exclusive, got: {', '.join(sorted(readiness_keys))}"
            )
        if readiness_keys:
            key = readiness_keys[0]
            kwargs["readiness"] = READINESS_KEYS[key](options[key])

        return cls(**kwargs)

    @classmethod
    def from_config(cls, config: 'ConfigurationManager') -> 'RenderOptions':
        """Builds options from the `renderer` section of a ConfigurationManager."""
        return cls.from_dict(config.get("renderer", {}) or {})

    def launch_args(self, platform: str = sys.platform) -> Tuple[str, ...]:
        """
        Launch flags, with the sandbox disabled on Linux.

        Chromium's SUID sandbox fails to start in many Linux containers, so
        `--no-sandbox --disable-setuid-sandbox` are appended there unless the
        caller already passed `--no-sandbox`.
        """
        args = self.args
        if platform.startswith("linux") and "--no-sandbox" not in args:
            args = args + SANDBOX_WORKAROUND_ARGS
        return args


def _viewport_from(value: Mapping[str, Any]) -> Viewport:
    try:
        return Viewport(width=int(value["width"]), height=int(value["height"]))
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"viewport needs integer 'width' and 'height': {e}") from e


def _navigation_options_from(value: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    options = {k: v for k, v in (value or {}).items() if k not in FORCED_NAVIGATION_KEYS}
    unknown = sorted(set(options) - set(NAVIGATION_KEYS))
    if unknown:
        raise ConfigurationError(
            f"Unsupported navigation options: {', '.join(unknown)}. Allowed: {', '.join(NAVIGATION_KEYS)}."
        )
    return options
