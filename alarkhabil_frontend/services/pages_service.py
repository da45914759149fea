import logging
from typing import Callable, Dict, List, Optional

from markupsafe import Markup
from pydantic import TypeAdapter, ValidationError

from alarkhabil_frontend.errors import BackendApiError, ContentNotFound, UpstreamError
from alarkhabil_frontend.schemas.content import (
    AuthorInfo,
    AuthorSummary,
    AuthorSummaryList,
    ChannelInfo,
    ChannelSummary,
    ChannelSummaryList,
    MetaPage,
    MetaPageList,
    PostInfo,
    PostSummary,
    PostSummaryList,
    TagSummaryList,
)
from alarkhabil_frontend.schemas.site_config import SiteConfig
from alarkhabil_frontend.services import templates
from alarkhabil_frontend.services.backend_api import (
    BackendApi,
    BackendEndpoint,
    Endpoints,
    FetchKind,
)
from alarkhabil_frontend.services.markdown_renderer import markdown_to_html
from alarkhabil_frontend.services.unix_time import FormattedTime, UnixTime

logger = logging.getLogger(__name__)

NO_POSTS = "There is no post in this list."
NO_CHANNELS = "There is no channel in this list."
NO_AUTHORS = "There is no author in this list."
NO_TAGS = "There is no tag in this list."
NO_META_PAGES = "There is no page in this list."


class PagesService:
    """
    Builds every HTML page: fetch, validate, render fragments, wrap in the base page.

    Lookup misses raise ContentNotFound. Listing failures and broken payloads
    raise UpstreamError. Deciding the HTTP status is left to the router.
    """

    def __init__(
        self,
        config: SiteConfig,
        backend: BackendApi,
        markdown: Callable[[str], str] = markdown_to_html,
    ):
        self.config = config
        self.backend = backend
        self.markdown = markdown

    # --- plumbing ---

    async def _fetch(
        self, endpoint: BackendEndpoint, query: Optional[Dict[str, str]] = None
    ) -> bytes:
        try:
            return await self.backend.fetch(endpoint, query)
        except BackendApiError as e:
            if endpoint.kind is FetchKind.LOOKUP:
                logger.info(f"Not found: {endpoint.path} {query or {}}: {e}")
                raise ContentNotFound(f"{endpoint.path} {query or {}}") from e
            raise UpstreamError(f"Listing {endpoint.path} failed: {e}") from e

    @staticmethod
    def _decode(schema, raw: bytes):
        try:
            if isinstance(schema, TypeAdapter):
                return schema.validate_json(raw)
            return schema.model_validate_json(raw)
        except ValidationError as e:
            name = getattr(schema, "__name__", None) or str(schema)
            raise UpstreamError(f"Invalid backend payload for {name}: {e}") from e

    def _time(self, secs: int) -> FormattedTime:
        return UnixTime(secs).format(self.config.server_timezone)

    def _page(
        self,
        path: str,
        title: Optional[str],
        content_html: str,
        allow_robots: bool = True,
    ) -> str:
        return templates.BaseTemplate(
            path=path,
            title=title,
            content_html=content_html,
            config=self.config,
            allow_robots=allow_robots,
        ).render()

    # --- fragment mapping ---

    def _post_list_item(
        self,
        post: PostSummary,
        channel: Optional[ChannelSummary | ChannelInfo] = None,
        author: Optional[AuthorSummary | AuthorInfo] = None,
    ) -> str:
        channel = channel or post.channel
        author = author or post.author
        if channel is None or author is None:
            raise UpstreamError(
                f"Post summary {post.post_uuid} lacks channel or author"
            )

        revision = self._time(post.revision_date)
        return templates.render_fragment(
            templates.POST_LIST_ITEM,
            post_uuid=post.post_uuid,
            title=post.title,
            channel_handle=channel.handle,
            channel_name=channel.name,
            author_uuid=author.uuid,
            author_name=author.name,
            revision_datetime=revision.datetime,
            revision_formatted=revision.formatted,
        )

    def _post_list(
        self,
        title: str,
        posts: List[PostSummary],
        channel: Optional[ChannelInfo] = None,
        author: Optional[AuthorInfo] = None,
    ) -> str:
        items = [self._post_list_item(post, channel, author) for post in posts]
        return templates.render_list(title, items, NO_POSTS)

    # --- routes ---

    async def top(self, path: str = "/") -> str:
        posts = self._decode(PostSummaryList, await self._fetch(Endpoints.POST_LIST))
        return self._page(path, None, self._post_list("Latest Posts", posts))

    async def meta_list(self, path: str = "/meta/") -> str:
        pages = self._decode(MetaPageList, await self._fetch(Endpoints.META_LIST))
        items = []
        for page in pages:
            updated = self._time(page.updated_date)
            items.append(
                templates.render_fragment(
                    templates.META_LIST_ITEM,
                    page_name=page.page_name,
                    title=page.title,
                    updated_datetime=updated.datetime,
                    updated_formatted=updated.formatted,
                )
            )
        content = templates.render_list("Meta pages", items, NO_META_PAGES)
        return self._page(path, "Meta pages", content)

    async def meta_page(self, page_name: str, path: str) -> str:
        raw = await self._fetch(Endpoints.META_INFO, {"page_name": page_name})
        page = self._decode(MetaPage, raw)
        updated = self._time(page.updated_date)
        content = templates.render_fragment(
            templates.META_PAGE,
            title=page.title,
            updated_datetime=updated.datetime,
            updated_formatted=updated.formatted,
            body_html=self.markdown(page.text),
        )
        return self._page(path, page.title, content)

    async def channel_list(self, path: str = "/c/") -> str:
        channels = self._decode(
            ChannelSummaryList, await self._fetch(Endpoints.CHANNEL_LIST)
        )
        items = [
            templates.render_fragment(
                templates.CHANNEL_LIST_ITEM, handle=channel.handle, name=channel.name
            )
            for channel in channels
        ]
        content = templates.render_list("Channels", items, NO_CHANNELS)
        return self._page(path, "Channels", content)

    async def channel(self, handle: str, path: str) -> str:
        raw = await self._fetch(Endpoints.CHANNEL_INFO, {"handle": handle})
        channel = self._decode(ChannelInfo, raw)

        raw_posts = await self._fetch(Endpoints.CHANNEL_POSTS, {"uuid": channel.uuid})
        posts = self._decode(PostSummaryList, raw_posts)

        created = self._time(channel.created_date)
        header = templates.render_fragment(
            templates.CHANNEL,
            handle=channel.handle,
            name=channel.name,
            lang=channel.lang,
            created_datetime=created.datetime,
            created_formatted=created.formatted,
            description_html=self.markdown(channel.description_text),
        )
        # channel/posts items carry the author only
        content = header + self._post_list("Posts", posts, channel=channel)
        return self._page(path, channel.name, content)

    async def post(self, channel_handle: str, post_uuid: str, path: str) -> str:
        raw = await self._fetch(Endpoints.POST_INFO, {"uuid": post_uuid})
        post = self._decode(PostInfo, raw)
        if post.channel.handle != channel_handle:
            logger.info(
                f"Post {post_uuid} belongs to {post.channel.handle!r}, "
                f"not {channel_handle!r}"
            )
            raise ContentNotFound(f"post/info {post_uuid} in {channel_handle}")

        revision = self._time(post.revision_date)
        tags_html = "".join(
            templates.render_fragment(templates.POST_TAG, tag_name=tag)
            for tag in post.tags
        )
        content = templates.render_fragment(
            templates.POST,
            post_uuid=post.post_uuid,
            title=post.title,
            channel_handle=post.channel.handle,
            channel_name=post.channel.name,
            author_uuid=post.author.uuid,
            author_name=post.author.name,
            revision_datetime=revision.datetime,
            revision_formatted=revision.formatted,
            tags_html=tags_html,
            body_html=self.markdown(post.revision_text),
        )
        return self._page(path, post.title, content)

    async def author_list(self, path: str = "/author/") -> str:
        authors = self._decode(
            AuthorSummaryList, await self._fetch(Endpoints.AUTHOR_LIST)
        )
        items = [
            templates.render_fragment(
                templates.AUTHOR_LIST_ITEM, uuid=author.uuid, name=author.name
            )
            for author in authors
        ]
        content = templates.render_list("Authors", items, NO_AUTHORS)
        return self._page(path, "Authors", content)

    async def author(self, author_uuid: str, path: str) -> str:
        raw = await self._fetch(Endpoints.AUTHOR_INFO, {"uuid": author_uuid})
        author = self._decode(AuthorInfo, raw)

        raw_posts = await self._fetch(Endpoints.AUTHOR_POSTS, {"uuid": author.uuid})
        posts = self._decode(PostSummaryList, raw_posts)

        created = self._time(author.created_date)
        header = templates.render_fragment(
            templates.AUTHOR,
            uuid=author.uuid,
            name=author.name,
            created_datetime=created.datetime,
            created_formatted=created.formatted,
            description_html=self.markdown(author.description_text),
        )
        # author/posts items carry the channel only
        content = header + self._post_list("Posts", posts, author=author)
        return self._page(path, author.name, content)

    async def tag_list(self, path: str = "/tags/") -> str:
        tags = self._decode(TagSummaryList, await self._fetch(Endpoints.TAG_LIST))
        items = [
            templates.render_fragment(
                templates.TAG_LIST_ITEM,
                tag_name=tag.tag_name,
                page_count=tag.page_count,
            )
            for tag in tags
        ]
        content = templates.render_list("Tags", items, NO_TAGS)
        return self._page(path, "Tags", content)

    async def tag(self, tag_name: str, path: str) -> str:
        raw = await self._fetch(Endpoints.TAG_POSTS, {"tag_name": tag_name})
        posts = self._decode(PostSummaryList, raw)
        header = templates.render_fragment(templates.TAG, tag_name=tag_name)
        content = header + self._post_list("Posts", posts)
        return self._page(path, f"#{tag_name}", content)

    # --- fetch-free pages ---

    def javascript_required(self, path: str) -> str:
        content = _heading("JavaScript required") + templates.render_fragment(
            templates.SINGLE_PARAGRAPH_MESSAGE,
            message="This page requires JavaScript to be enabled.",
        )
        return self._page(path, "JavaScript required", content)

    def not_found(self, path: str) -> str:
        return self._page(
            path, "Not Found", _heading("404: Not Found"), allow_robots=False
        )

    def error(self, path: str) -> str:
        return self._page(path, "Error", _heading("Error"), allow_robots=False)


def _heading(text: str) -> str:
    return str(Markup("<h1>{}</h1>").format(text))
