from pydantic import BaseModel


class MarkdownParseRequest(BaseModel):
    markdown_text: str


class MarkdownParseResponse(BaseModel):
    html: str


class TimestampFormatResponse(BaseModel):
    datetime: str  # <time datetime="...">...</time>
    formatted: str  # for display
