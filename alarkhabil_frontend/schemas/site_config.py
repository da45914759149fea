from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NavigationItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str  # relative or absolute url
    text: str  # link text


class SiteConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    api_url: str = "http://localhost:7781/"
    site_name: str = ""
    site_description: str = ""
    site_copyright: str = ""
    header_navigation: List[NavigationItem] = Field(default_factory=list)
    footer_navigation: List[NavigationItem] = Field(default_factory=list)
    top_url: str = "http://localhost:7780/"
    og_image: str = ""
    server_timezone: str = "UTC"
