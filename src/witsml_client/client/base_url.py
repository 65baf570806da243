"""Resolution of the backend origin and path prefix."""

from __future__ import annotations

import logging

import httpx

from witsml_client.models.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost"
DEV_SERVER_PORT = 3000
DEV_API_PORT = 5000


class BaseUrlResolver:
    """Derives the API origin from configuration or the frontend's location.

    Precedence:
    1. `configured_url`, used verbatim when it is an absolute URL.
    2. `page_location`: same scheme and host; the API port is 5000 when the
       page is served from the development port 3000, absent otherwise.
    3. `http://localhost` when nothing else parses.
    """

    def __init__(
        self, configured_url: str | None = None, page_location: str | None = None
    ) -> None:
        self._configured_url = configured_url
        self._page_location = page_location

    def resolve(self) -> httpx.URL:
        """Return the effective API origin. Never raises."""
        try:
            if self._configured_url:
                return _parse_absolute(self._configured_url)
            if self._page_location:
                return self._from_page_location(self._page_location)
            raise ConfigurationError("No API url or page location configured")
        except ConfigurationError as e:
            logger.warning(f"Falling back to {DEFAULT_BASE_URL}: {e}")
            return httpx.URL(DEFAULT_BASE_URL)

    def base_path_name(self) -> str:
        """Path prefix of the origin, with a bare root mapped to ''."""
        return _path_prefix(self.resolve())

    def url_for(self, path_name: str) -> httpx.URL:
        """Absolute URL for `path_name` under the resolved origin and prefix."""
        origin = self.resolve()
        return origin.join(_path_prefix(origin) + path_name)

    def _from_page_location(self, page_location: str) -> httpx.URL:
        page = _parse_absolute(page_location)
        # httpx reports IPv6 hosts without brackets
        host = f"[{page.host}]" if ":" in page.host else page.host
        port = f":{DEV_API_PORT}" if page.port == DEV_SERVER_PORT else ""
        return _parse_absolute(f"{page.scheme}://{host}{port}")


def _path_prefix(origin: httpx.URL) -> str:
    return origin.path if origin.path != "/" else ""


def _parse_absolute(value: str) -> httpx.URL:
    try:
        url = httpx.URL(value)
    except (httpx.InvalidURL, ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid URL {value!r}: {e}") from e
    if not url.is_absolute_url or not url.host:
        raise ConfigurationError(f"Not an absolute URL: {value!r}")
    return url
