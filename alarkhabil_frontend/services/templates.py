"""
Template composition: content fragments, the base page, and the skeleton registry.

Fragments know nothing about branding or navigation; they take already
formatted strings and interpolate them. The base page wraps exactly one
pre-rendered HTML string. Every fragment is also published, rendered with
empty fields, as a <template> element so client scripts reuse the same markup.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urljoin

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from markupsafe import Markup

from alarkhabil_frontend.schemas.site_config import SiteConfig
from alarkhabil_frontend.utils import Lazy

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,  # a missing field is a bug, not an empty string
)


def path_segment(value) -> str:
    """Percent-encode a value for use as exactly one URL path segment."""
    return quote(str(value), safe="")


env.filters["path_segment"] = path_segment

ROBOTS_ALLOW = "index,follow,notranslate"
ROBOTS_DENY = "noindex,nofollow"


@dataclass(frozen=True)
class Fragment:
    id: str
    fields: Tuple[str, ...]

    @property
    def template_name(self) -> str:
        return f"fragments/{self.id}.html"


META_PAGE = Fragment(
    "meta-page", ("title", "updated_datetime", "updated_formatted", "body_html")
)
META_LIST_ITEM = Fragment(
    "meta-list-item",
    ("page_name", "title", "updated_datetime", "updated_formatted"),
)
POST = Fragment(
    "post",
    (
        "post_uuid",
        "title",
        "channel_handle",
        "channel_name",
        "author_uuid",
        "author_name",
        "revision_datetime",
        "revision_formatted",
        "tags_html",
        "body_html",
    ),
)
POST_LIST_ITEM = Fragment(
    "post-list-item",
    (
        "post_uuid",
        "title",
        "channel_handle",
        "channel_name",
        "author_uuid",
        "author_name",
        "revision_datetime",
        "revision_formatted",
    ),
)
POST_TAG = Fragment("post-tag", ("tag_name",))
CHANNEL = Fragment(
    "channel",
    (
        "handle",
        "name",
        "lang",
        "created_datetime",
        "created_formatted",
        "description_html",
    ),
)
CHANNEL_LIST_ITEM = Fragment("channel-list-item", ("handle", "name"))
AUTHOR = Fragment(
    "author",
    ("uuid", "name", "created_datetime", "created_formatted", "description_html"),
)
AUTHOR_LIST_ITEM = Fragment("author-list-item", ("uuid", "name"))
TAG = Fragment("tag", ("tag_name",))
TAG_LIST_ITEM = Fragment("tag-list-item", ("tag_name", "page_count"))
POST_LIST = Fragment("post-list", ("title", "items_html"))
SINGLE_PARAGRAPH_MESSAGE = Fragment("single-paragraph-message", ("message",))

FRAGMENTS: Tuple[Fragment, ...] = (
    META_PAGE,
    META_LIST_ITEM,
    POST,
    POST_LIST_ITEM,
    POST_TAG,
    CHANNEL,
    CHANNEL_LIST_ITEM,
    AUTHOR,
    AUTHOR_LIST_ITEM,
    TAG,
    TAG_LIST_ITEM,
    POST_LIST,
    SINGLE_PARAGRAPH_MESSAGE,
)


def render_fragment(fragment: Fragment, **fields) -> str:
    """Render one fragment; the keyword set must be exactly the fragment's fields."""
    given = set(fields)
    expected = set(fragment.fields)
    if given != expected:
        raise ValueError(
            f"Fragment {fragment.id!r} got fields {sorted(given)}, "
            f"expected {sorted(expected)}"
        )

    context = {
        name: Markup(value) if name.endswith("_html") else value
        for name, value in fields.items()
    }
    return env.get_template(fragment.template_name).render(**context)


def _render_skeletons() -> Tuple[Tuple[str, str], ...]:
    logger.debug(f"Rendering {len(FRAGMENTS)} fragment skeletons")
    return tuple(
        (
            fragment.id,
            render_fragment(fragment, **{name: "" for name in fragment.fields}),
        )
        for fragment in FRAGMENTS
    )


# (fragment id, skeleton html) pairs, computed once per process
skeleton_registry: Lazy[Tuple[Tuple[str, str], ...]] = Lazy(_render_skeletons)


def get_skeletons() -> Dict[str, str]:
    return dict(skeleton_registry.get())


def render_list(title: str, items_html: List[str], empty_message: str) -> str:
    """Wrap rendered items in the list container; no items means one message."""
    if items_html:
        inner = "".join(items_html)
    else:
        inner = render_fragment(SINGLE_PARAGRAPH_MESSAGE, message=empty_message)
    return render_fragment(POST_LIST, title=title, items_html=inner)


def resolve_url(top_url: str, url: str) -> str:
    """Relative values resolve against top_url; absolute ones are kept as-is."""
    return urljoin(top_url, url)


@dataclass(frozen=True)
class BaseTemplate:
    path: str
    title: Optional[str]
    content_html: str
    config: SiteConfig
    allow_robots: bool = True

    @property
    def site_name(self) -> str:
        return self.config.site_name

    @property
    def page_title(self) -> str:
        if self.title:
            return f"{self.title} - {self.site_name}"
        return self.site_name

    @property
    def displayed_title(self) -> str:
        return self.title or self.site_name

    @property
    def url(self) -> str:
        return resolve_url(self.config.top_url, self.path)

    @property
    def og_image(self) -> str:
        return resolve_url(self.config.top_url, self.config.og_image)

    def render(self) -> str:
        return env.get_template("base.html").render(
            page_title=self.page_title,
            displayed_title=self.displayed_title,
            url=self.url,
            og_image=self.og_image,
            robots=ROBOTS_ALLOW if self.allow_robots else ROBOTS_DENY,
            site_name=self.site_name,
            site_description=self.config.site_description,
            site_copyright=self.config.site_copyright,
            header_navigation=self.config.header_navigation,
            footer_navigation=self.config.footer_navigation,
            site_config_json=self.config.model_dump_json(),
            content_html=Markup(self.content_html),
            skeletons=skeleton_registry.get(),
        )
