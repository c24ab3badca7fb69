"""Tests for the command-line client."""

import importlib.util
import json
import os

import pytest
import httpx
from httpx import ASGITransport


CLI_PATH = os.path.join(os.path.dirname(__file__), "..", "scripts", "cli", "url_shortener_cli.py")


def load_cli_module():
    spec = importlib.util.spec_from_file_location("url_shortener_cli", CLI_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


cli_module = load_cli_module()


@pytest.fixture
async def cli(app):
    """CLI wired straight to the test app."""
    cli = cli_module.URLShortenerCLI(base_url="http://testserver", transport=ASGITransport(app=app))
    yield cli
    await cli.close()


@pytest.mark.asyncio
class TestURLShortenerCLI:
    """Test CLI commands against the app."""

    async def test_shorten_single(self, cli, capsys):
        """One URL with a custom code."""
        code = await cli.shorten(["https://example.com/a"], validity=10, shortcode="cli1")

        assert code == 0
        out = json.loads(capsys.readouterr().out)
        assert out["success"] is True
        assert out["results"][0]["shortLink"] == "http://testserver/cli1"

    async def test_shorten_batch(self, cli, capsys):
        """Several URLs at once, one result each."""
        urls = [f"https://example.com/{i}" for i in range(3)]

        code = await cli.shorten(urls)

        assert code == 0
        out = json.loads(capsys.readouterr().out)
        assert [r["url"] for r in out["results"]] == urls
        assert all(r["success"] for r in out["results"])

    async def test_shorten_batch_limit(self, cli, capsys):
        """More than five URLs is refused without calling the service."""
        code = await cli.shorten([f"https://example.com/{i}" for i in range(6)])

        assert code == 1
        assert "At most 5" in json.loads(capsys.readouterr().err)["error"]

    async def test_shorten_reports_errors(self, cli, capsys):
        """Service errors come back per URL."""
        code = await cli.shorten(["not-a-url"])

        assert code == 1
        out = json.loads(capsys.readouterr().err)
        assert out["results"][0]["status"] == 400
        assert out["results"][0]["error"] == "Bad Request"

    async def test_shortcode_needs_single_url(self, cli, capsys):
        """A custom code cannot be shared by several URLs."""
        code = await cli.shorten(["https://a.example", "https://b.example"], shortcode="same")

        assert code == 1
        capsys.readouterr()

    async def test_stats(self, cli, capsys):
        """Per-code and aggregate statistics."""
        await cli.shorten(["https://example.com/a"], shortcode="st1")
        capsys.readouterr()

        assert await cli.stats("st1") == 0
        single = json.loads(capsys.readouterr().out)
        assert single["shortcode"] == "st1"
        assert single["totalClicks"] == 0

        assert await cli.stats() == 0
        overall = json.loads(capsys.readouterr().out)
        assert overall["totalUrls"] == 1

    async def test_stats_not_found(self, cli, capsys):
        """Unknown codes exit non-zero."""
        assert await cli.stats("missing") == 1
        assert json.loads(capsys.readouterr().err)["status"] == 404

    async def test_health(self, cli, capsys):
        """Healthy service exits zero."""
        assert await cli.health() == 0
        assert json.loads(capsys.readouterr().out)["health"]["status"] == "healthy"


@pytest.fixture
async def gateway_cli():
    """CLI behind a proxy that answers every request with an HTML error page."""
    def handler(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    cli = cli_module.URLShortenerCLI(base_url="http://testserver", transport=httpx.MockTransport(handler))
    yield cli
    await cli.close()


@pytest.mark.asyncio
class TestNonJSONResponses:
    """HTML error pages are reported, not raised."""

    async def test_shorten(self, gateway_cli, capsys):
        assert await gateway_cli.shorten(["https://example.com"]) == 1

        result = json.loads(capsys.readouterr().err)["results"][0]
        assert result["success"] is False
        assert result["status"] == 502
        assert "Bad Gateway" in result["body"]

    async def test_stats(self, gateway_cli, capsys):
        assert await gateway_cli.stats() == 1

        out = json.loads(capsys.readouterr().err)
        assert out["success"] is False
        assert out["status"] == 502
        assert out["error"] == "Non-JSON response"

    async def test_health(self, gateway_cli, capsys):
        assert await gateway_cli.health() == 1

        out = json.loads(capsys.readouterr().err)
        assert out["success"] is False
        assert "Bad Gateway" in out["health"]["body"]


def test_parser_commands():
    """Argument parsing for each command."""
    parser = cli_module.build_parser()

    args = parser.parse_args(["shorten", "https://a.example", "--validity", "15", "--shortcode", "abc"])
    assert args.urls == ["https://a.example"]
    assert args.validity == 15
    assert args.shortcode == "abc"

    args = parser.parse_args(["stats"])
    assert args.short_code is None

    args = parser.parse_args(["--base-url", "http://sho.rt", "health"])
    assert args.base_url == "http://sho.rt"
