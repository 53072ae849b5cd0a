"""End-to-end uniqueness audit: sitemap -> pages -> comparisons -> report files."""

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from protech.audit.facets import SitemapFilter
from protech.audit.pages import USER_AGENT, PageFetcher, valid_pages
from protech.audit.report import ReportBuilder
from protech.audit.similarity import compare_all
from protech.audit.sitemap import SitemapFetcher
from protech.config import settings

logger = logging.getLogger(__name__)


@dataclass
class AuditOptions:
    sitemap_url: str = field(default_factory=lambda: settings.sitemap_url)
    mode: SitemapFilter = SitemapFilter.ALL
    sample: int | None = None
    detailed: bool = False
    output_dir: str = field(default_factory=lambda: settings.audit_output_dir)
    threshold: float = field(default_factory=lambda: settings.audit_similarity_threshold)
    min_word_count: int = field(default_factory=lambda: settings.audit_min_word_count)
    show_progress: bool = False


@dataclass
class AuditOutcome:
    exit_code: int
    report: dict | None = None
    report_path: Path | None = None
    detailed_path: Path | None = None


def write_json(path: Path, payload: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("Report saved to %s", path)
    return path


async def run_audit(options: AuditOptions, client: httpx.AsyncClient | None = None) -> AuditOutcome:
    """Run one audit. Exit code 1 when there is nothing to analyze."""
    start = time.monotonic()

    if client is None:
        async with httpx.AsyncClient(follow_redirects=True, headers={"User-Agent": USER_AGENT}) as own_client:
            return await _run(options, own_client, start)
    return await _run(options, client, start)


async def _run(options: AuditOptions, client: httpx.AsyncClient, start: float) -> AuditOutcome:
    fetcher = SitemapFetcher(mode=options.mode, sample=options.sample, client=client)
    urls = await fetcher.fetch(options.sitemap_url)
    if not urls:
        logger.error("No URLs found in sitemap. Exiting.")
        return AuditOutcome(exit_code=1)

    pages = await PageFetcher(mode=options.mode, show_progress=options.show_progress).fetch_batch(urls, client)
    usable = valid_pages(pages, options.min_word_count)
    logger.info("Found %d valid pages out of %d", len(usable), len(pages), extra={"step": "fetch"})
    if not usable:
        logger.error("No valid pages to analyze. Exiting.")
        return AuditOutcome(exit_code=1)

    result = compare_all(usable, options.threshold, show_progress=options.show_progress)
    builder = ReportBuilder(threshold=options.threshold, mode=options.mode)
    report = builder.build(result, total_fetched=len(pages))

    output_dir = Path(options.output_dir)
    report_path = write_json(output_dir / settings.audit_output_file, report)
    detailed_path = None
    if options.detailed:
        detailed_path = write_json(output_dir / settings.audit_detailed_output_file, builder.detailed_results(result))

    duration_ms = round((time.monotonic() - start) * 1000)
    logger.info("Audit finished", extra={"step": "audit", "duration_ms": duration_ms})
    return AuditOutcome(exit_code=0, report=report, report_path=report_path, detailed_path=detailed_path)
