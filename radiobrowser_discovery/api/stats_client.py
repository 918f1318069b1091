"""REST client for the radio-browser server statistics endpoint."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlsplit, urlunsplit

import requests

from ..config import ProbeConfig
from ..discovery.models import ServerStats
from ..exceptions import StatsClientError

logger = logging.getLogger(__name__)

STATS_PATH = "json/stats"


def build_proxy_url(proxy_uri: str, user: str | None = None, password: str | None = None) -> str:
    """Return *proxy_uri* with percent-encoded credentials in its netloc.

    Credentials are only embedded when both user and password are given.
    """
    if not user or password is None:
        return proxy_uri
    parts = urlsplit(proxy_uri)
    host = parts.netloc.rpartition("@")[2]
    netloc = f"{quote(user, safe='')}:{quote(password, safe='')}@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


class StatsClient:
    """Thin wrapper around one server's ``GET /json/stats``."""

    def __init__(self, base_url: str, config: ProbeConfig):
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._timeout = config.request_timeout
        self._session = requests.Session()
        self._session.headers["User-Agent"] = config.user_agent
        self._session.headers["Accept"] = "application/json"
        if config.proxy_uri:
            proxy = build_proxy_url(config.proxy_uri, config.proxy_user, config.proxy_password)
            self._session.proxies = {"http": proxy, "https": proxy}

    def get_server_stats(self) -> ServerStats:
        """Fetch and decode the server statistics. One network round trip."""
        url = f"{self.base_url}{STATS_PATH}"
        logger.debug("GET %s", url)

        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise StatsClientError(f"Request failed: {exc}") from exc
        finally:
            self._session.close()

        if resp.status_code >= 400:
            raise StatsClientError(
                f"HTTP {resp.status_code} on GET {url}: {resp.text}",
                status_code=resp.status_code,
                response_body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise StatsClientError(
                f"Malformed stats payload from {url}",
                status_code=resp.status_code,
                response_body=resp.text,
            ) from exc

        if not isinstance(data, dict):
            raise StatsClientError(
                f"Stats payload from {url} is not a JSON object",
                status_code=resp.status_code,
                response_body=resp.text,
            )

        return ServerStats.from_dict(data)
