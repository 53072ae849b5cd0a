"""Tests for batch page fetching and text extraction."""

from unittest.mock import AsyncMock, patch

import httpx

from protech.audit.facets import SitemapFilter
from protech.audit.pages import PageFetcher, clean_text, extract_page, valid_pages
from protech.core.types import PageRecord

BASE = "https://protech-ohio.com"


def test_clean_text():
    assert clean_text("  a\n\tb   c ") == "a b c"


class TestExtractPage:
    def test_main_selector(self, html_factory):
        html = html_factory("<h1>Furnace   repair</h1><p>We fix furnaces.</p>", title="Furnaces", description="Fast fixes")
        page = extract_page(f"{BASE}/x", html)
        assert page.content == "Furnace repair We fix furnaces."
        assert page.word_count == 5
        assert page.title == "Furnaces"
        assert page.meta_description == "Fast fixes"

    def test_body_fallback(self, html_factory):
        page = extract_page(f"{BASE}/x", html_factory("<div>Only body text</div>", main=False))
        assert page.content == "Home Services Contact Only body text ProTech"

    def test_scripts_dropped(self, html_factory):
        html = html_factory("<p>Visible</p><script>var hidden = 1;</script><style>p{}</style>")
        assert extract_page(f"{BASE}/x", html).content == "Visible"

    def test_custom_selector(self, html_factory):
        html = html_factory('<article class="copy">Article words</article><p>Other</p>')
        assert extract_page(f"{BASE}/x", html, content_selector="article.copy").content == "Article words"

    def test_missing_title_and_meta(self):
        page = extract_page(f"{BASE}/x", "<html><body><main>Text</main></body></html>")
        assert page.title == ""
        assert page.meta_description == ""


class TestValidPages:
    def test_min_word_count(self):
        records = [
            PageRecord(url="a", content="x " * 100, word_count=100),
            PageRecord(url="b", content="x " * 99, word_count=99),
            PageRecord(url="c", content="", word_count=0, fetch_error="boom"),
        ]
        assert [r.url for r in valid_pages(records, 100)] == ["a"]

    def test_default_threshold(self):
        records = [PageRecord(url="a", content="x", word_count=1)]
        assert valid_pages(records) == []


class TestPageFetcher:
    def test_defaults(self):
        fetcher = PageFetcher()
        assert fetcher.concurrency == 5
        assert fetcher.batch_delay == 0.5
        assert fetcher.content_selector == "main"

    async def test_fetch_batch_keeps_order_and_isolates_failures(self, html_factory):
        def handler(request):
            if request.url.path.endswith("broken"):
                return httpx.Response(500)
            if request.url.path.endswith("offline"):
                raise httpx.ConnectError("down", request=request)
            return httpx.Response(200, text=html_factory(f"<p>Page {request.url.path}</p>"))

        urls = [f"{BASE}/a", f"{BASE}/broken", f"{BASE}/c", f"{BASE}/offline", f"{BASE}/e"]
        fetcher = PageFetcher(concurrency=2, batch_delay_ms=0)
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            records = await fetcher.fetch_batch(urls, client)

        assert [r.url for r in records] == urls
        assert records[0].content == "Page /a"
        assert records[1].word_count == 0 and records[1].fetch_error
        assert records[3].content == "" and records[3].fetch_error
        assert records[4].fetch_error is None

    async def test_sleeps_between_batches_only(self, html_factory):
        handler = lambda request: httpx.Response(200, text=html_factory("<p>x</p>"))  # noqa: E731
        urls = [f"{BASE}/{i}" for i in range(5)]
        fetcher = PageFetcher(concurrency=2, batch_delay_ms=500)
        with patch("protech.audit.pages.asyncio.sleep", new_callable=AsyncMock) as sleep:
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                await fetcher.fetch_batch(urls, client)
        # three batches, two pauses
        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.5)

    async def test_attaches_facets(self, html_factory):
        url = f"{BASE}/services/heating/furnace/repairs/igniter/kent-oh"
        fetcher = PageFetcher(batch_delay_ms=0, mode=SitemapFilter.SERVICE_DETAILS)
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=html_factory("<p>x</p>")))
        async with httpx.AsyncClient(transport=transport) as client:
            [record] = await fetcher.fetch_batch([url], client)
        assert record.facets.item == "igniter"
        assert record.facets.location == "kent-oh"

    async def test_empty_url_list(self):
        assert await PageFetcher(batch_delay_ms=0).fetch_batch([], AsyncMock()) == []
