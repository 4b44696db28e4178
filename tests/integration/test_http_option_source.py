"""
Integration tests for the HTTP option source.

Runs a local aiohttp server standing in for the storefront API.
"""

import asyncio
import socket

import pytest
from aiohttp import test_utils, web

from stitchquote.core.catalog import DEFAULT_OPTION_RECORDS, OptionCatalog
from stitchquote.infrastructure.catalog import HttpOptionSource
from stitchquote.utils.exceptions import CatalogUnavailableError

LIVE_RECORDS = [
    {
        "id": 101,
        "name": "Glow Thread",
        "description": "Glows in the dark",
        "price": "9.99",
        "category": "threads",
        "level": "premium",
        "isActive": True,
        "isIncompatible": "[\"border-merrowed\"]",
    },
    {
        "id": "coverage-75",
        "name": "75% Coverage",
        "price": 15,
        "category": "coverage",
        "isActive": True,
    },
]


def serve(handler, call):
    """Run ``call(base_url)`` against a server answering with ``handler``."""
    async def _run():
        app = web.Application()
        app.router.add_get("/api/embroidery-options", handler)
        async with test_utils.TestServer(app) as server:
            return await call(str(server.make_url("/api")))

    return asyncio.run(_run())


def json_handler(payload, status=200):
    async def handler(request):
        return web.json_response(payload, status=status)
    return handler


class TestHttpOptionSource:
    """Test fetching raw records."""

    def test_bare_list(self):
        """Test a JSON list response."""
        records = serve(json_handler(LIVE_RECORDS), lambda url: HttpOptionSource(url).fetch())
        assert [r["id"] for r in records] == [101, "coverage-75"]

    def test_data_envelope(self):
        """Test a {"data": [...]} response."""
        records = serve(json_handler({"data": LIVE_RECORDS}), lambda url: HttpOptionSource(url).fetch())
        assert len(records) == 2

    def test_active_filter_sent(self):
        """Test the isActive query parameter."""
        seen = []

        async def handler(request):
            seen.append(dict(request.query))
            return web.json_response([])

        serve(handler, lambda url: HttpOptionSource(url).fetch())
        serve(handler, lambda url: HttpOptionSource(url).fetch(active_only=False))

        assert seen == [{"isActive": "true"}, {}]

    def test_server_error(self):
        """Test a non-200 status raises CatalogUnavailableError."""
        with pytest.raises(CatalogUnavailableError) as exc_info:
            serve(json_handler({"error": "down"}, status=500), lambda url: HttpOptionSource(url).fetch())

        assert exc_info.value.context["status_code"] == 500

    @pytest.mark.parametrize("payload", [{"options": []}, "nope", {"data": "nope"}])
    def test_unexpected_shape(self, payload):
        """Test payloads that are not record lists."""
        with pytest.raises(CatalogUnavailableError):
            serve(json_handler(payload), lambda url: HttpOptionSource(url).fetch())

    def test_invalid_json(self):
        """Test a body that is not JSON."""
        async def handler(request):
            return web.Response(text="<html>maintenance</html>")

        with pytest.raises(CatalogUnavailableError):
            serve(handler, lambda url: HttpOptionSource(url).fetch())

    def test_connection_refused(self):
        """Test an unreachable server raises CatalogUnavailableError."""
        with socket.socket() as sock:
            sock.bind(("127.0.0.1", 0))
            port = sock.getsockname()[1]
        source = HttpOptionSource(f"http://127.0.0.1:{port}/api", timeout=2)

        with pytest.raises(CatalogUnavailableError):
            asyncio.run(source.fetch())

    def test_url(self):
        """Test the endpoint is joined to the base URL."""
        assert HttpOptionSource("http://localhost:5000/api/").url == "http://localhost:5000/api/embroidery-options"


class TestCatalogOverHttp:
    """Test the catalog against a live source."""

    def test_live_catalog(self):
        """Test live records are normalized and installed."""
        async def load(url):
            catalog = OptionCatalog(HttpOptionSource(url))
            await catalog.load_options()
            return catalog

        catalog = serve(json_handler(LIVE_RECORDS), load)

        assert not catalog.used_fallback
        assert len(catalog) == 2
        glow = catalog.require("101")
        assert glow.price == pytest.approx(9.99)
        assert glow.incompatible_with == frozenset({"border-merrowed"})
        assert catalog.require("coverage-75").price == 15

    def test_fallback_on_error(self):
        """Test a failing source leaves the built-in catalog in place."""
        async def load(url):
            catalog = OptionCatalog(HttpOptionSource(url))
            await catalog.load_options()
            return catalog

        catalog = serve(json_handler({}, status=503), load)

        assert catalog.used_fallback
        assert len(catalog) == len(DEFAULT_OPTION_RECORDS)
