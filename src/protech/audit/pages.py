"""Fetch pages in fixed-size concurrent batches and extract their text.

Each batch runs concurrently; batches run one after another with a
pause in between so the site isn't hammered.
"""

import asyncio
import logging

import httpx
from bs4 import BeautifulSoup
from tqdm import tqdm

from protech.audit.facets import SitemapFilter, parse_facets
from protech.config import settings
from protech.core.types import PageRecord

logger = logging.getLogger(__name__)

USER_AGENT = "ProTech-Uniqueness-Audit/1.0"
STRIP_TAGS = ("script", "style", "noscript")


def clean_text(text: str) -> str:
    return " ".join(text.split())


def extract_page(url: str, html: str, content_selector: str = "main") -> PageRecord:
    """Build a PageRecord from raw HTML.

    Text comes from the first element matching ``content_selector``,
    falling back to ``<body>`` and then the whole document.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(STRIP_TAGS):
        tag.decompose()

    container = soup.select_one(content_selector) if content_selector else None
    if container is None:
        container = soup.body or soup
    content = clean_text(container.get_text(" "))

    title = clean_text(soup.title.get_text()) if soup.title else ""
    meta = soup.find("meta", attrs={"name": "description"})
    meta_description = clean_text(meta.get("content", "")) if meta else ""

    return PageRecord(
        url=url,
        content=content,
        word_count=len(content.split()),
        title=title,
        meta_description=meta_description,
    )


def placeholder_page(url: str, error: str) -> PageRecord:
    return PageRecord(url=url, content="", word_count=0, fetch_error=error)


def valid_pages(records: list[PageRecord], min_word_count: int | None = None) -> list[PageRecord]:
    minimum = settings.audit_min_word_count if min_word_count is None else min_word_count
    return [r for r in records if r.word_count >= minimum]


class PageFetcher:
    """Batch page fetcher.

    Args:
        concurrency: Pages fetched at once within a batch.
        batch_delay_ms: Pause between batches (not after the last one).
        content_selector: CSS selector for the main content region.
        mode: Sitemap filter mode, decides which URL facets get parsed.
        show_progress: Draw a tqdm progress bar.
    """

    def __init__(
        self,
        concurrency: int | None = None,
        batch_delay_ms: int | None = None,
        content_selector: str | None = None,
        mode: SitemapFilter = SitemapFilter.ALL,
        show_progress: bool = False,
    ):
        self.concurrency = max(1, concurrency or settings.audit_concurrency)
        self.batch_delay = (settings.audit_batch_delay_ms if batch_delay_ms is None else batch_delay_ms) / 1000
        self.content_selector = content_selector or settings.audit_content_selector
        self.mode = mode
        self.show_progress = show_progress

    async def fetch_page(self, client: httpx.AsyncClient, url: str) -> PageRecord:
        """Fetch one page. Failures produce a zero-content placeholder."""
        try:
            resp = await client.get(url)
            resp.raise_for_status()
            record = extract_page(url, resp.text, self.content_selector)
        except Exception as e:
            logger.warning("Error fetching %s: %s", url, e, extra={"url": url})
            record = placeholder_page(url, str(e) or type(e).__name__)
        record.facets = parse_facets(url, self.mode)
        return record

    async def fetch_batch(
        self, urls: list[str], client: httpx.AsyncClient | None = None,
    ) -> list[PageRecord]:
        """Fetch every URL, in input order, one batch at a time."""
        if client is None:
            async with httpx.AsyncClient(
                follow_redirects=True, headers={"User-Agent": USER_AGENT},
            ) as own_client:
                return await self._run_batches(own_client, urls)
        return await self._run_batches(client, urls)

    async def _run_batches(self, client: httpx.AsyncClient, urls: list[str]) -> list[PageRecord]:
        records: list[PageRecord] = []
        batches = [urls[i:i + self.concurrency] for i in range(0, len(urls), self.concurrency)]
        logger.info("Fetching %d pages in %d batches of up to %d", len(urls), len(batches), self.concurrency)

        with tqdm(total=len(urls), desc="Fetching pages", unit="page", disable=not self.show_progress) as bar:
            for index, batch in enumerate(batches):
                results = await asyncio.gather(*(self.fetch_page(client, url) for url in batch))
                records.extend(results)
                bar.update(len(batch))
                if index < len(batches) - 1 and self.batch_delay > 0:
                    await asyncio.sleep(self.batch_delay)

        failed = sum(1 for r in records if r.fetch_error)
        if failed:
            logger.warning("%d of %d pages failed to fetch", failed, len(records))
        return records
