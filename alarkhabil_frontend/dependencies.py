from typing import Callable

from fastapi import Depends

from alarkhabil_frontend.schemas.site_config import SiteConfig
from alarkhabil_frontend.services.backend_api import BackendApi
from alarkhabil_frontend.services.markdown_renderer import markdown_to_html
from alarkhabil_frontend.services.pages_service import PagesService
from alarkhabil_frontend.services.site_config import load_config


async def get_site_config() -> SiteConfig:
    return await load_config()


def get_backend_api(config: SiteConfig = Depends(get_site_config)) -> BackendApi:
    return BackendApi.new_v1(config)


def get_markdown() -> Callable[[str], str]:
    return markdown_to_html


def get_pages_service(
    config: SiteConfig = Depends(get_site_config),
    backend: BackendApi = Depends(get_backend_api),
    markdown=Depends(get_markdown),
) -> PagesService:
    return PagesService(config, backend, markdown=markdown)
