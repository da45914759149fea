import asyncio
import json

from alarkhabil_frontend.schemas.site_config import SiteConfig
from alarkhabil_frontend.services import site_config


def test_default_config_is_packaged_and_cached():
    first = site_config.default_config.get()
    second = site_config.default_config.get()
    assert first is second
    assert first.site_name
    assert first.server_timezone == "UTC"


def test_load_config_reads_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "api_url": "http://backend.test/",
                "site_name": "From File",
                "header_navigation": [{"url": "/", "text": "Home"}],
                "server_timezone": "Asia/Tokyo",
            }
        )
    )

    config = asyncio.run(site_config.load_config(str(path)))

    assert config.site_name == "From File"
    assert config.header_navigation[0].text == "Home"
    assert config.server_timezone == "Asia/Tokyo"


def test_missing_file_uses_default(tmp_path):
    config = asyncio.run(site_config.load_config(str(tmp_path / "nope.json")))
    assert config == site_config.default_config.get()


def test_malformed_file_uses_default(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    config = asyncio.run(site_config.load_config(str(path)))
    assert config == site_config.default_config.get()


def test_wrong_types_use_default():
    config = site_config.parse_config(b'{"header_navigation": "nope"}')
    assert config == site_config.default_config.get()


def test_load_config_uses_settings_path(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"site_name": "Configured"}))
    monkeypatch.setattr(site_config.settings, "CONFIG_FILE", str(path))

    config = asyncio.run(site_config.load_config())

    assert isinstance(config, SiteConfig)
    assert config.site_name == "Configured"
