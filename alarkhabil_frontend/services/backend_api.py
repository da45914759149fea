import enum
import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional
from urllib.parse import urlencode, urljoin, urlsplit

import httpx

from alarkhabil_frontend.errors import BackendApiError
from alarkhabil_frontend.schemas.site_config import SiteConfig
from alarkhabil_frontend.settings import settings

logger = logging.getLogger(__name__)


class BackendApiVersion(enum.Enum):
    V1 = "v1"


class FetchKind(enum.Enum):
    # keyed by one identifier; a miss is an expected bad/old link
    LOOKUP = "lookup"
    # a collection; a miss means the backend is in trouble
    LISTING = "listing"


@dataclass(frozen=True)
class BackendEndpoint:
    path: str
    kind: FetchKind


class Endpoints:
    POST_LIST = BackendEndpoint("post/list", FetchKind.LISTING)
    POST_INFO = BackendEndpoint("post/info", FetchKind.LOOKUP)
    META_LIST = BackendEndpoint("meta/list", FetchKind.LISTING)
    META_INFO = BackendEndpoint("meta/info", FetchKind.LOOKUP)
    CHANNEL_LIST = BackendEndpoint("channel/list", FetchKind.LISTING)
    CHANNEL_INFO = BackendEndpoint("channel/info", FetchKind.LOOKUP)
    CHANNEL_POSTS = BackendEndpoint("channel/posts", FetchKind.LISTING)
    AUTHOR_LIST = BackendEndpoint("author/list", FetchKind.LISTING)
    AUTHOR_INFO = BackendEndpoint("author/info", FetchKind.LOOKUP)
    AUTHOR_POSTS = BackendEndpoint("author/posts", FetchKind.LISTING)
    TAG_LIST = BackendEndpoint("tag/list", FetchKind.LISTING)
    TAG_POSTS = BackendEndpoint("tag/posts", FetchKind.LISTING)


class BackendApi:
    """
    Read-only client for the content backend's JSON API.

    Every failure (bad URL, transport error, non-2xx status) comes out as a
    BackendApiError. Whether that means "not found" or "backend down" is up to
    the caller.
    """

    def __init__(
        self,
        config: SiteConfig,
        version: BackendApiVersion = BackendApiVersion.V1,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        self.config = config
        self.version = version
        self.client = client
        self.timeout = settings.BACKEND_TIMEOUT_SECONDS if timeout is None else timeout

    @classmethod
    def new_v1(cls, config: SiteConfig, **kwargs) -> "BackendApi":
        return cls(config, BackendApiVersion.V1, **kwargs)

    def get_url(self, path: str, query: Optional[Mapping[str, str]] = None) -> str:
        if self.version != BackendApiVersion.V1:
            raise BackendApiError(f"Unsupported backend api version: {self.version}")

        parts = urlsplit(self.config.api_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise BackendApiError(f"Invalid backend api url: {self.config.api_url!r}")

        url = urljoin(urljoin(self.config.api_url, "/api/v1/"), path)
        if query:
            url = f"{url}?{urlencode(dict(query))}"
        return url

    async def get_bytes(
        self, path: str, query: Optional[Dict[str, str]] = None
    ) -> bytes:
        url = self.get_url(path, query)
        logger.debug(f"GET {url}")
        try:
            if self.client is not None:
                res = await self.client.get(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    res = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise BackendApiError(f"Failed to get url: {url}: {e}") from e

        if not res.is_success:
            raise BackendApiError(f"Failed to get url: {url} ({res.status_code})")
        return res.content

    async def fetch(
        self, endpoint: BackendEndpoint, query: Optional[Dict[str, str]] = None
    ) -> bytes:
        return await self.get_bytes(endpoint.path, query)
