from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Shapes returned by the content backend. Field names follow the wire format.


class BackendModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class AuthorSummary(BackendModel):
    uuid: str
    name: str


class ChannelSummary(BackendModel):
    uuid: str
    handle: str
    name: str
    lang: str


class PostSummary(BackendModel):
    post_uuid: str
    revision_uuid: str
    revision_date: int = Field(ge=0)  # unix timestamp in seconds
    title: str
    # absent on channel/posts (author only) and author/posts (channel only)
    author: Optional[AuthorSummary] = None
    channel: Optional[ChannelSummary] = None


class ChannelInfo(BackendModel):
    uuid: str
    handle: str
    name: str
    created_date: int = Field(ge=0)
    lang: str
    description_text: str  # Markdown text


class PostInfo(BackendModel):
    post_uuid: str
    channel: ChannelSummary
    tags: List[str] = Field(default_factory=list)
    revision_uuid: str
    revision_date: int = Field(ge=0)
    title: str
    revision_text: str  # Markdown text
    author: AuthorSummary


class AuthorInfo(BackendModel):
    uuid: str
    name: str
    created_date: int = Field(ge=0)
    description_text: str  # Markdown text


class MetaPageListItem(BackendModel):
    page_name: str
    updated_date: int = Field(ge=0)
    title: str
    text: Optional[str] = None


class MetaPage(MetaPageListItem):
    text: str


class TagSummary(BackendModel):
    tag_name: str
    page_count: int = Field(ge=0)


PostSummaryList = TypeAdapter(List[PostSummary])
ChannelSummaryList = TypeAdapter(List[ChannelSummary])
AuthorSummaryList = TypeAdapter(List[AuthorSummary])
MetaPageList = TypeAdapter(List[MetaPageListItem])
TagSummaryList = TypeAdapter(List[TagSummary])
