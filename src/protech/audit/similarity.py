"""Pairwise page similarity using the Dice coefficient over character bigrams.

Overall similarity weights body content far above title and meta
description. Every unordered pair of pages is compared once, so the
cost is quadratic in the number of pages.
"""

import logging
import re
from collections import Counter
from itertools import combinations

from tqdm import tqdm

from protech.config import settings
from protech.core.types import ComparisonResult, PageRecord, SimilarityRecord, SimilarPage

logger = logging.getLogger(__name__)

CONTENT_WEIGHT = 0.7
TITLE_WEIGHT = 0.15
META_WEIGHT = 0.15

_WHITESPACE = re.compile(r"\s+")


def compare_two_strings(first: str, second: str) -> float:
    """Dice coefficient of two strings' character bigrams, in [0, 1].

    Whitespace is ignored. Identical strings (including two empty ones)
    score 1.0; a string shorter than two characters scores 0.0 against
    anything different.
    """
    a = _WHITESPACE.sub("", first or "")
    b = _WHITESPACE.sub("", second or "")
    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    bigrams = Counter(a[i:i + 2] for i in range(len(a) - 1))
    intersection = 0
    for i in range(len(b) - 1):
        bigram = b[i:i + 2]
        if bigrams[bigram] > 0:
            bigrams[bigram] -= 1
            intersection += 1
    return (2.0 * intersection) / (len(a) + len(b) - 2)


def compare_pages(a: PageRecord, b: PageRecord, threshold: float | None = None) -> SimilarityRecord:
    threshold = settings.audit_similarity_threshold if threshold is None else threshold
    content = compare_two_strings(a.content, b.content)
    title = compare_two_strings(a.title, b.title)
    meta = compare_two_strings(a.meta_description, b.meta_description)
    overall = CONTENT_WEIGHT * content + TITLE_WEIGHT * title + META_WEIGHT * meta
    return SimilarityRecord(
        page_a=a.url,
        page_b=b.url,
        similarity=overall,
        content_similarity=content,
        title_similarity=title,
        meta_similarity=meta,
        is_suspicious=overall > threshold,
    )


def compare_all(
    pages: list[PageRecord], threshold: float | None = None, show_progress: bool = False,
) -> ComparisonResult:
    """Compare every pair of pages and score each page's uniqueness.

    Suspicious pairs are recorded on both pages. ``uniqueness_score`` is
    one minus the share of all pages that are suspiciously similar to it.
    """
    threshold = settings.audit_similarity_threshold if threshold is None else threshold
    for page in pages:
        page.similar_pages = []

    total_pairs = len(pages) * (len(pages) - 1) // 2
    logger.info("Comparing %d pages (%d pairs)", len(pages), total_pairs)

    similarities: list[SimilarityRecord] = []
    with tqdm(total=total_pairs, desc="Comparing pages", unit="pair", disable=not show_progress) as bar:
        for a, b in combinations(pages, 2):
            record = compare_pages(a, b, threshold)
            similarities.append(record)
            if record.is_suspicious:
                a.similar_pages.append(SimilarPage(url=b.url, similarity=record.similarity))
                b.similar_pages.append(SimilarPage(url=a.url, similarity=record.similarity))
            bar.update(1)

    for page in pages:
        page.uniqueness_score = 1 - len(page.similar_pages) / len(pages)

    suspicious = sum(1 for s in similarities if s.is_suspicious)
    logger.info("Found %d suspicious pairs above %.2f", suspicious, threshold)
    return ComparisonResult(page_analysis=pages, similarities=similarities)
