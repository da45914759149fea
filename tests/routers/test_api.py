import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from alarkhabil_frontend import dependencies as deps
from alarkhabil_frontend.routers import api
from tests.conftest import make_config


def make_app(config=None, markdown=None):
    app = FastAPI()
    app.dependency_overrides[deps.get_site_config] = lambda: config or make_config()
    if markdown is not None:
        app.dependency_overrides[deps.get_markdown] = lambda: markdown
    app.include_router(api.router)
    return app


def test_markdown_parse_passes_text_through_and_wraps_result():
    seen = []

    def converter(text):
        seen.append(text)
        return "<h1>Hi</h1>\n"

    client = TestClient(make_app(markdown=converter))
    res = client.post("/frontend/api/v1/markdown/parse", json={"markdown_text": "# Hi"})

    assert res.status_code == 200
    assert res.json() == {"html": "<h1>Hi</h1>\n"}
    assert seen == ["# Hi"]


def test_markdown_parse_with_real_converter():
    client = TestClient(make_app())
    res = client.post("/frontend/api/v1/markdown/parse", json={"markdown_text": "# Hi"})
    assert res.status_code == 200
    assert res.json()["html"].startswith("<h1>Hi</h1>")


def test_markdown_parse_rejects_missing_field():
    client = TestClient(make_app())
    res = client.post("/frontend/api/v1/markdown/parse", json={"text": "# Hi"})
    assert res.status_code == 422
    assert res.headers["content-type"] == "application/json"


def test_markdown_parse_returns_500_json_on_error():
    def broken(text):
        raise RuntimeError("boom")

    client = TestClient(make_app(markdown=broken))
    res = client.post("/frontend/api/v1/markdown/parse", json={"markdown_text": "x"})
    assert res.status_code == 500
    assert res.json()["detail"] == "Failed to parse markdown"


def test_config_get_returns_full_config():
    config = make_config(site_name="Configured")
    client = TestClient(make_app(config=config))

    res = client.get("/frontend/api/v1/config/get")

    assert res.status_code == 200
    assert res.json() == config.model_dump()
    assert set(res.json()) == {
        "api_url",
        "site_name",
        "site_description",
        "site_copyright",
        "header_navigation",
        "footer_navigation",
        "top_url",
        "og_image",
        "server_timezone",
    }


def test_timestamp_format_epoch_in_utc():
    client = TestClient(make_app())
    res = client.get("/frontend/api/v1/timestamp/format", params={"timestamp": 0})
    assert res.status_code == 200
    assert res.json() == {
        "datetime": "1970-01-01T00:00:00+0000",
        "formatted": "1970-01-01 00:00:00 UTC",
    }


def test_timestamp_format_uses_server_timezone():
    client = TestClient(make_app(config=make_config(server_timezone="Asia/Tokyo")))
    res = client.get("/frontend/api/v1/timestamp/format", params={"timestamp": 0})
    assert res.json() == {
        "datetime": "1970-01-01T00:00:00+0000",
        "formatted": "1970-01-01 09:00:00 JST",
    }


@pytest.mark.parametrize("params", [{}, {"timestamp": "abc"}, {"timestamp": "-5"}])
def test_timestamp_format_defaults_to_epoch(params):
    client = TestClient(make_app())
    res = client.get("/frontend/api/v1/timestamp/format", params=params)
    assert res.status_code == 200
    assert res.json()["datetime"] == "1970-01-01T00:00:00+0000"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0),
        ("", 0),
        ("12", 12),
        (" 12 ", 12),
        ("1.5", 0),
        ("-1", 0),
        (str(api.MAX_TIMESTAMP), api.MAX_TIMESTAMP),
        (str(api.MAX_TIMESTAMP + 1), 0),
    ],
)
def test_parse_timestamp(value, expected):
    assert api.parse_timestamp(value) == expected
