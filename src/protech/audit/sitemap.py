"""Fetch the site's sitemap and pick the URLs to audit."""

import logging
import random
import xml.etree.ElementTree as ET

import httpx

from protech.audit.facets import (
    SitemapFilter,
    is_location_url,
    is_service_detail_url,
)
from protech.config import settings

logger = logging.getLogger(__name__)

SITEMAP_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}


def extract_locs(xml_text: str) -> list[str]:
    """Every ``<url><loc>`` in a sitemap document, namespaced or not.

    A sitemap with a single ``<url>`` still yields a list.
    """
    root = ET.fromstring(xml_text)
    locs = root.findall(".//sm:url/sm:loc", SITEMAP_NS)
    if not locs:
        locs = root.findall(".//url/loc")
    return [loc.text.strip() for loc in locs if loc.text and loc.text.strip()]


def apply_filter(
    urls: list[str],
    mode: SitemapFilter = SitemapFilter.ALL,
    exclude_patterns: list[str] | None = None,
) -> list[str]:
    """Exclusion blocklist in ALL mode, a single inclusion rule otherwise."""
    if mode is SitemapFilter.LOCATIONS:
        return [u for u in urls if is_location_url(u)]
    if mode is SitemapFilter.SERVICE_DETAILS:
        return [u for u in urls if is_service_detail_url(u)]
    patterns = settings.audit_exclude_patterns if exclude_patterns is None else exclude_patterns
    return [u for u in urls if not any(p in u for p in patterns)]


def sample_urls(urls: list[str], sample: int | None, rng: random.Random | None = None) -> list[str]:
    """Random subset without replacement; the full list when sample is unset or too big."""
    if not sample or sample <= 0 or sample >= len(urls):
        return urls
    return (rng or random).sample(urls, sample)


class SitemapFetcher:
    """Download a sitemap and return the filtered, optionally sampled, URL list."""

    def __init__(
        self,
        mode: SitemapFilter = SitemapFilter.ALL,
        sample: int | None = None,
        exclude_patterns: list[str] | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.mode = mode
        self.sample = sample
        self.exclude_patterns = exclude_patterns
        self._client = client

    async def fetch(self, url: str | None = None) -> list[str]:
        """Network or parse failures are logged and yield an empty list."""
        url = url or settings.sitemap_url
        logger.info("Fetching sitemap from %s", url)
        try:
            if self._client is not None:
                resp = await self._client.get(url)
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    resp = await client.get(url)
            resp.raise_for_status()
            urls = extract_locs(resp.text)
        except httpx.HTTPError as e:
            logger.error("Error fetching sitemap %s: %s", url, e)
            return []
        except ET.ParseError as e:
            logger.error("Error parsing sitemap %s: %s", url, e)
            return []

        logger.info("Found %d URLs in sitemap", len(urls))
        filtered = apply_filter(urls, self.mode, self.exclude_patterns)
        if self.mode is not SitemapFilter.ALL:
            logger.info("Filtered to %d %s pages", len(filtered), self.mode.value)
        else:
            logger.info("After exclusions: %d URLs", len(filtered))

        sampled = sample_urls(filtered, self.sample)
        if len(sampled) < len(filtered):
            logger.info("Sampled %d of %d URLs", len(sampled), len(filtered))
        return sampled
