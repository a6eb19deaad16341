# tests/test_catalog.py
import json

import httpx
import pytest

from app.services.catalog_service import CATALOG_ERROR_MESSAGE, CatalogLoader

CATALOG = [
    {"name": "Cookie", "price": 2.50, "imageClass": "c1"},
    {"name": "Brownie", "price": 3.25, "imageClass": "c2"},
]


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "desserts.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


def test_load_local_catalog_renders_tiles(catalog_file):
    loader = CatalogLoader(catalog_file)

    view = loader.load()

    assert view.error is None
    assert [tile.name for tile in view.tiles] == ["Cookie", "Brownie"]
    assert view.tiles[0].css_class == "card c1"
    assert view.tiles[0].price == 2.50
    assert loader.get("Brownie").image_class == "c2"


def test_load_happens_once(catalog_file):
    loader = CatalogLoader(catalog_file)
    first = loader.load()

    catalog_file.unlink()

    assert loader.load() is first


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"name": "Cookie"}),
        json.dumps([{"name": "Cookie"}]),
        json.dumps([{"name": "Cookie", "price": "free", "imageClass": "c1"}]),
    ],
)
def test_malformed_catalog_shows_error(tmp_path, content):
    path = tmp_path / "desserts.json"
    path.write_text(content, encoding="utf-8")

    view = CatalogLoader(path).load()

    assert view.tiles == []
    assert view.error == CATALOG_ERROR_MESSAGE


def test_non_utf8_catalog_shows_error(tmp_path):
    path = tmp_path / "desserts.json"
    path.write_bytes(b'[{"name": "Cr\xe8me", "price": 4.0, "imageClass": "c3"}]')

    view = CatalogLoader(path).load()

    assert view.tiles == []
    assert view.error == CATALOG_ERROR_MESSAGE


def test_missing_catalog_file_shows_error(tmp_path):
    loader = CatalogLoader(tmp_path / "nope.json")

    view = loader.load()

    assert view.error == CATALOG_ERROR_MESSAGE
    assert loader.get("Cookie") is None


def test_load_remote_catalog():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/desserts.json"
        return httpx.Response(200, json=CATALOG)

    client = httpx.Client(transport=httpx.MockTransport(handler))
    view = CatalogLoader("http://pos.local/desserts.json", client=client).load()

    assert [tile.label for tile in view.tiles] == ["Cookie", "Brownie"]


def test_remote_non_success_shows_error():
    client = httpx.Client(
        transport=httpx.MockTransport(lambda request: httpx.Response(404))
    )

    view = CatalogLoader("http://pos.local/desserts.json", client=client).load()

    assert view.error == CATALOG_ERROR_MESSAGE


def test_remote_transport_error_shows_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))

    view = CatalogLoader("http://pos.local/desserts.json", client=client).load()

    assert view.error == CATALOG_ERROR_MESSAGE
