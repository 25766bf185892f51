"""
Request interception for rendered pages.

With third-party filtering enabled, a page may only load URLs under the local
server or under one of the explicitly allowed prefixes.
"""
from typing import Iterable, Tuple, TYPE_CHECKING

from route_prerenderer.core.logger import get_logger

if TYPE_CHECKING:
    from playwright.async_api import Route

logger = get_logger(__name__)

ROUTE_PATTERN = "**/*"


def is_request_allowed(url: str, base_url: str, allowed_urls: Iterable[str], skip_third_party: bool) -> bool:
    if not skip_third_party:
        return True
    prefixes = tuple(allowed_urls) + (base_url,)
    return url.startswith(prefixes)


class RequestFilter:
    """
    `page.route` handler that aborts disallowed requests and continues the rest.

    Attributes:
        base_url (str): The local server URL, always allowed.
        allowed_urls (Tuple[str, ...]): Extra allowed URL prefixes.
        skip_third_party (bool): Whether filtering is enabled at all.
    """
    def __init__(self, base_url: str, allowed_urls: Iterable[str] = (), skip_third_party: bool = False):
        self.base_url = base_url
        self.allowed_urls: Tuple[str, ...] = tuple(allowed_urls)
        self.skip_third_party = skip_third_party

    def allows(self, url: str) -> bool:
        return is_request_allowed(url, self.base_url, self.allowed_urls, self.skip_third_party)

    async def __call__(self, route: 'Route') -> None:
        url = route.request.url
        if not self.allows(url):
            logger.info(f"Blocked third-party request: {url}")
            await route.abort()
            return
        await route.continue_()
