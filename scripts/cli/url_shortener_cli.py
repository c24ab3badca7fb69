#!/usr/bin/env python3
"""
Command-line client for a running URL shortener service.

The service keeps everything in memory, so the CLI talks to it over HTTP
instead of opening the store directly.

Usage:
    python url_shortener_cli.py shorten <url> [<url> ...] [--validity MINUTES] [--shortcode CODE]
    python url_shortener_cli.py stats [<short_code>]
    python url_shortener_cli.py health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

import httpx


MAX_BATCH_SIZE = 5


class URLShortenerCLI:
    """Command-line client for the URL shortener HTTP API."""

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize CLI.

        Args:
            base_url: Service base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests mount the app here)
        """
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    def _emit(self, payload: dict, ok: bool) -> int:
        print(json.dumps(payload, indent=2), file=sys.stdout if ok else sys.stderr)
        return 0 if ok else 1

    def _read_body(self, response: httpx.Response) -> dict:
        """Decode a JSON object body, wrapping anything else under `body`."""
        try:
            data = response.json()
        except ValueError:
            return {"error": "Non-JSON response", "body": response.text}
        if not isinstance(data, dict):
            return {"error": "Unexpected response", "body": data}
        return data

    async def _shorten_one(self, url: str, validity: Optional[int], shortcode: Optional[str]) -> dict:
        body = {"url": url}
        if validity is not None:
            body["validity"] = validity
        if shortcode:
            body["shortcode"] = shortcode

        try:
            response = await self.client.post("/shorturls", json=body)
        except httpx.HTTPError as e:
            return {"url": url, "success": False, "error": f"Request failed: {e}"}

        data = self._read_body(response)
        if response.status_code == 201:
            return {"url": url, "success": True, **data}
        return {"url": url, "success": False, "status": response.status_code, **data}

    async def shorten(self, urls: List[str], validity: Optional[int] = None, shortcode: Optional[str] = None) -> int:
        """Shorten up to five URLs concurrently."""
        if len(urls) > MAX_BATCH_SIZE:
            return self._emit({"success": False, "error": f"At most {MAX_BATCH_SIZE} URLs per call"}, ok=False)
        if shortcode and len(urls) > 1:
            return self._emit({"success": False, "error": "--shortcode needs exactly one URL"}, ok=False)

        results = await asyncio.gather(*(self._shorten_one(url, validity, shortcode) for url in urls))
        ok = all(r["success"] for r in results)
        return self._emit({"success": ok, "results": list(results)}, ok=ok)

    async def stats(self, short_code: Optional[str] = None) -> int:
        """Analytics for one short code, or totals for all of them."""
        path = f"/shorturls/{short_code}" if short_code else "/api/statistics"
        try:
            response = await self.client.get(path)
        except httpx.HTTPError as e:
            return self._emit({"success": False, "error": f"Request failed: {e}"}, ok=False)

        data = self._read_body(response)
        if response.status_code == 200:
            return self._emit({"success": True, **data}, ok=True)
        return self._emit({"success": False, "status": response.status_code, **data}, ok=False)

    async def health(self) -> int:
        """Check service health."""
        try:
            response = await self.client.get("/health")
        except httpx.HTTPError as e:
            return self._emit({"success": False, "error": f"Service unreachable: {e}"}, ok=False)

        data = self._read_body(response)
        ok = response.status_code == 200 and data.get("status") == "healthy"
        return self._emit({"success": ok, "health": data}, ok=ok)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL for 30 minutes (default)
  %(prog)s shorten https://example.com/long/url

  # Shorten with custom code and a one hour validity
  %(prog)s shorten https://example.com/long/url --shortcode mylink --validity 60

  # Shorten several URLs at once
  %(prog)s shorten https://example.com/a https://example.com/b

  # Get analytics for one short code
  %(prog)s stats mylink

  # Get statistics for every short code
  %(prog)s stats

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--base-url",
        default=os.getenv("BASE_URL", "http://localhost:3000"),
        help="Service base URL (default: from BASE_URL env or http://localhost:3000)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Request timeout in seconds"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten one or more URLs")
    shorten_parser.add_argument("urls", nargs="+", help=f"URLs to shorten (at most {MAX_BATCH_SIZE})")
    shorten_parser.add_argument("--validity", type=int, help="Validity in minutes")
    shorten_parser.add_argument("--shortcode", help="Custom short code (single URL only)")

    stats_parser = subparsers.add_parser("stats", help="Get URL statistics")
    stats_parser.add_argument("short_code", nargs="?", help="Short code (omit for all URLs)")

    subparsers.add_parser("health", help="Check service health")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = URLShortenerCLI(base_url=args.base_url, timeout=args.timeout)

    try:
        if args.command == "shorten":
            return await cli.shorten(args.urls, args.validity, args.shortcode)
        elif args.command == "stats":
            return await cli.stats(args.short_code)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1
    finally:
        await cli.close()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
