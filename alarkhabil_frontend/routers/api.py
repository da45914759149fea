import logging
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from alarkhabil_frontend import dependencies as deps
from alarkhabil_frontend.schemas.api import (
    MarkdownParseRequest,
    MarkdownParseResponse,
    TimestampFormatResponse,
)
from alarkhabil_frontend.schemas.site_config import SiteConfig
from alarkhabil_frontend.services.unix_time import UnixTime

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/frontend/api/v1")

# 9999-12-30T23:59:59Z; any timezone offset still lands inside year 9999
MAX_TIMESTAMP = 253402214399


def parse_timestamp(value: Optional[str]) -> int:
    """Missing, unparseable or out-of-range values all mean the epoch."""
    try:
        secs = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0
    if secs < 0 or secs > MAX_TIMESTAMP:
        return 0
    return secs


@router.post("/markdown/parse", response_model=MarkdownParseResponse)
def markdown_parse(
    request: MarkdownParseRequest,
    markdown: Callable[[str], str] = Depends(deps.get_markdown),
):
    """Render user Markdown exactly as the server renders post bodies."""
    try:
        return MarkdownParseResponse(html=markdown(request.markdown_text))
    except Exception as e:
        logger.error(f"Error in /markdown/parse endpoint: {e}")
        raise HTTPException(status_code=500, detail="Failed to parse markdown")


@router.get("/config/get", response_model=SiteConfig)
def config_get(config: SiteConfig = Depends(deps.get_site_config)):
    return config


@router.get("/timestamp/format", response_model=TimestampFormatResponse)
def timestamp_format(
    timestamp: Optional[str] = Query(None, description="Unix time in seconds"),
    config: SiteConfig = Depends(deps.get_site_config),
):
    try:
        result = UnixTime(parse_timestamp(timestamp)).format(config.server_timezone)
        return TimestampFormatResponse(
            datetime=result.datetime, formatted=result.formatted
        )
    except Exception as e:
        logger.error(f"Error in /timestamp/format endpoint: {e}")
        raise HTTPException(status_code=500, detail="Failed to format timestamp")
