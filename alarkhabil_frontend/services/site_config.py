import asyncio
import logging
from pathlib import Path

from pydantic import ValidationError

from alarkhabil_frontend.schemas.site_config import SiteConfig
from alarkhabil_frontend.settings import settings
from alarkhabil_frontend.utils import Lazy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config-default.json"


def _parse_packaged_default() -> SiteConfig:
    raw = DEFAULT_CONFIG_PATH.read_bytes()
    return SiteConfig.model_validate_json(raw)


# config-default.json shipped inside the package, parsed once per process
default_config: Lazy[SiteConfig] = Lazy(_parse_packaged_default)


def parse_config(raw: bytes | None) -> SiteConfig:
    if raw is None:
        return default_config.get()
    try:
        return SiteConfig.model_validate_json(raw)
    except ValidationError as e:
        logger.debug(f"Malformed site config, using default: {e}")
        return default_config.get()


def _read_config_file(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except OSError:
        return None


async def load_config(config_file: str | None = None) -> SiteConfig:
    """
    Read the site config for one request.
    A missing or unparseable file silently yields the packaged default.
    """
    path = Path(config_file or settings.CONFIG_FILE)
    raw = await asyncio.to_thread(_read_config_file, path)
    return parse_config(raw)
