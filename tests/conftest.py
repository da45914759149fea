import json

from alarkhabil_frontend.errors import BackendApiError
from alarkhabil_frontend.schemas.site_config import NavigationItem, SiteConfig


def make_config(**overrides) -> SiteConfig:
    values = {
        "api_url": "http://backend.test/",
        "site_name": "Test Site",
        "site_description": "A site for tests",
        "site_copyright": "(c) tests",
        "header_navigation": [NavigationItem(url="/", text="Home")],
        "footer_navigation": [NavigationItem(url="/meta/", text="About")],
        "top_url": "https://example.com/",
        "og_image": "/branding/og.png",
        "server_timezone": "UTC",
    }
    values.update(overrides)
    return SiteConfig(**values)


class FakeBackendApi:
    """
    In-memory backend stand-in.
    `responses` maps endpoint path to a JSON-able payload; missing paths fail
    the way the real client does. Every call is recorded in order.
    """

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls = []

    async def fetch(self, endpoint, query=None):
        return await self.get_bytes(endpoint.path, query)

    async def get_bytes(self, path, query=None):
        self.calls.append((path, dict(query or {})))
        if path not in self.responses:
            raise BackendApiError(f"Failed to get url: {path}")
        payload = self.responses[path]
        if isinstance(payload, bytes):
            return payload
        return json.dumps(payload).encode()


# --- sample backend payloads ---

AUTHOR = {"uuid": "a-1", "name": "Alice"}
CHANNEL = {"uuid": "c-1", "handle": "news", "name": "News", "lang": "en"}


def post_summary(post_uuid="p-1", title="Hello", *, author=True, channel=True):
    data = {
        "post_uuid": post_uuid,
        "revision_uuid": f"r-{post_uuid}",
        "revision_date": 0,
        "title": title,
    }
    if author:
        data["author"] = AUTHOR
    if channel:
        data["channel"] = CHANNEL
    return data


def post_info(channel=None, **overrides):
    data = {
        "post_uuid": "p-1",
        "channel": channel or CHANNEL,
        "tags": ["python", "web"],
        "revision_uuid": "r-1",
        "revision_date": 86400,
        "title": "Hello",
        "revision_text": "# Body",
        "author": AUTHOR,
    }
    data.update(overrides)
    return data


def channel_info(**overrides):
    data = {
        "uuid": "c-1",
        "handle": "news",
        "name": "News",
        "created_date": 0,
        "lang": "en",
        "description_text": "All the *news*.",
    }
    data.update(overrides)
    return data


def author_info(**overrides):
    data = {
        "uuid": "a-1",
        "name": "Alice",
        "created_date": 0,
        "description_text": "Writer.",
    }
    data.update(overrides)
    return data


def meta_page(**overrides):
    data = {
        "page_name": "about",
        "updated_date": 0,
        "title": "About",
        "text": "About this site.",
    }
    data.update(overrides)
    return data


def fake_markdown(text: str) -> str:
    return f"<p>{text}</p>"
