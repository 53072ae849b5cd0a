"""Turn comparison results into the JSON uniqueness report.

Report keys are camelCase; the dashboards that read these files
predate this package.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone

from protech.audit.facets import SitemapFilter
from protech.config import settings
from protech.core.types import ComparisonResult, PageRecord, SimilarityRecord, UrlFacets

logger = logging.getLogger(__name__)

TOP_N = 10
CRITICAL_UNIQUENESS = 50.0
MODERATE_UNIQUENESS = 70.0
LOW_GROUP_UNIQUENESS = 60.0
NEAR_IDENTICAL = 0.9

SAME_SERVICE_SAME_LOCATION = "Same service in same location"
SAME_SERVICE_DIFFERENT_LOCATIONS = "Same service in different locations"
DIFFERENT_SERVICES_SAME_LOCATION = "Different services in same location"
DIFFERENT_SERVICES_DIFFERENT_LOCATIONS = "Different services in different locations"
SAME_LOCATION = "Same location"
DIFFERENT_LOCATIONS = "Different locations"
UNCLASSIFIED = "Unclassified"


@dataclass
class Recommendation:
    severity: str  # "critical" | "warning" | "ok"
    message: str

    def to_dict(self) -> dict:
        return {"severity": self.severity, "message": self.message}


def comparison_type(a: UrlFacets, b: UrlFacets) -> str:
    """Human-readable label for how two pages relate."""
    if a.item and b.item:
        same_item = a.item == b.item
        same_location = a.location == b.location
        if same_item and same_location:
            return SAME_SERVICE_SAME_LOCATION
        if same_item:
            return SAME_SERVICE_DIFFERENT_LOCATIONS
        if same_location:
            return DIFFERENT_SERVICES_SAME_LOCATION
        return DIFFERENT_SERVICES_DIFFERENT_LOCATIONS
    if a.location and b.location:
        return SAME_LOCATION if a.location == b.location else DIFFERENT_LOCATIONS
    return UNCLASSIFIED


def _facets_to_dict(facets: UrlFacets) -> dict:
    return {
        "category": facets.category,
        "system": facets.system,
        "serviceType": facets.service_type,
        "item": facets.item,
        "location": facets.location,
    }


def similarity_to_dict(record: SimilarityRecord) -> dict:
    return {
        "pageA": record.page_a,
        "pageB": record.page_b,
        "similarity": record.similarity,
        "contentSimilarity": record.content_similarity,
        "titleSimilarity": record.title_similarity,
        "metaSimilarity": record.meta_similarity,
        "isSuspicious": record.is_suspicious,
    }


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class ReportBuilder:
    """Build the summary report for one audit run."""

    def __init__(self, threshold: float | None = None, mode: SitemapFilter = SitemapFilter.ALL):
        self.threshold = settings.audit_similarity_threshold if threshold is None else threshold
        self.mode = mode

    def page_scores(self, result: ComparisonResult) -> dict[str, dict]:
        """Per-page average similarity, percentage uniqueness and suspicious partner count."""
        scores: dict[str, list[float]] = defaultdict(list)
        for record in result.similarities:
            scores[record.page_a].append(record.similarity)
            scores[record.page_b].append(record.similarity)

        pages = {}
        for page in result.page_analysis:
            avg = _mean(scores.get(page.url, []))
            pages[page.url] = {
                "avgSimilarity": avg,
                "uniquenessPercent": (1 - avg) * 100,
                "suspiciousPartnerCount": len(page.similar_pages),
            }
        return pages

    def _page_to_dict(self, page: PageRecord, scores: dict) -> dict:
        entry = {
            "url": page.url,
            "title": page.title,
            "wordCount": page.word_count,
            "uniquenessScore": page.uniqueness_score,
            **scores,
            "similarPages": [{"url": s.url, "similarity": s.similarity} for s in page.similar_pages],
        }
        if self.mode is not SitemapFilter.ALL:
            entry["facets"] = _facets_to_dict(page.facets)
        return entry

    def _pair_to_dict(self, record: SimilarityRecord, facets: dict[str, UrlFacets]) -> dict:
        label = comparison_type(facets.get(record.page_a, UrlFacets()), facets.get(record.page_b, UrlFacets()))
        return {
            **similarity_to_dict(record),
            "comparisonType": label,
            "isCritical": label == SAME_SERVICE_SAME_LOCATION,
        }

    def group_analysis(self, result: ComparisonResult, key) -> dict[str, dict]:
        """Average similarity per facet value, counting each pair once per distinct value."""
        facets = {p.url: p.facets for p in result.page_analysis}
        groups: dict[str, list[float]] = defaultdict(list)
        for record in result.similarities:
            values = {key(facets[record.page_a]), key(facets[record.page_b])}
            for value in values:
                if value:
                    groups[value].append(record.similarity)
        analysis = {}
        for value, sims in sorted(groups.items()):
            avg = _mean(sims)
            analysis[value] = {
                "comparisonCount": len(sims),
                "avgSimilarity": avg,
                "uniquenessScore": (1 - avg) * 100,
            }
        return analysis

    def recommendations(self, summary: dict, pairs: list[dict], groups: dict[str, dict]) -> list[Recommendation]:
        recs: list[Recommendation] = []
        avg = summary["averageUniquenessPercent"]
        if avg < CRITICAL_UNIQUENESS:
            recs.append(Recommendation("critical", "Overall uniqueness is very low. Significant content improvements needed."))
        elif avg < MODERATE_UNIQUENESS:
            recs.append(Recommendation("warning", "Pages have moderate uniqueness. Consider additional location-specific content."))

        if summary["potentialDuplicateCount"] or summary["flaggedPageCount"]:
            recs.append(Recommendation("warning", "Review the potential duplicate pages and make sure each carries unique content."))
            recs.append(Recommendation("warning", "Add location-specific details, images or testimonials, and check canonical URLs."))

        if any(p["isCritical"] and p["similarity"] > NEAR_IDENTICAL for p in pairs):
            recs.append(Recommendation("critical", "Found nearly identical pages for the same service in the same location."))

        for name, label, advice in (
            ("locationAnalysis", "location", "add more content about local challenges"),
            ("serviceAnalysis", "service", "add more service-specific details for each location"),
        ):
            low = sorted(
                (item for item in groups.get(name, {}).items() if item[1]["uniquenessScore"] < LOW_GROUP_UNIQUENESS),
                key=lambda item: item[1]["uniquenessScore"],
            )[:3]
            for value, _ in low:
                recs.append(Recommendation("warning", f"Low-uniqueness {label} {value}: {advice}."))

        if not recs:
            recs.append(Recommendation("ok", "Pages have good uniqueness scores. Keep monitoring as content is added."))
        return recs

    def build(self, result: ComparisonResult, total_fetched: int | None = None) -> dict:
        pages = result.page_analysis
        total_fetched = len(pages) if total_fetched is None else total_fetched
        scores = self.page_scores(result)
        facets = {p.url: p.facets for p in pages}

        page_entries = sorted(
            (self._page_to_dict(p, scores[p.url]) for p in pages),
            key=lambda e: (e["uniquenessScore"] if e["uniquenessScore"] is not None else 1.0, e["uniquenessPercent"]),
        )
        duplicate_cutoff = 1 - self.threshold
        potential_duplicates = [
            e for e in page_entries if e["uniquenessScore"] is not None and e["uniquenessScore"] < duplicate_cutoff
        ]
        least_unique = sorted(page_entries, key=lambda e: e["uniquenessPercent"])[:TOP_N]
        pairs = [
            self._pair_to_dict(r, facets)
            for r in sorted(result.similarities, key=lambda r: r.similarity, reverse=True)[:TOP_N]
        ]

        summary = {
            "mode": self.mode.value,
            "similarityThreshold": self.threshold,
            "totalPagesFetched": total_fetched,
            "totalPagesAnalyzed": len(pages),
            "invalidPages": max(0, total_fetched - len(pages)),
            "totalComparisons": len(result.similarities),
            "averageUniqueness": _mean([p.uniqueness_score for p in pages if p.uniqueness_score is not None]),
            "averageUniquenessPercent": _mean([s["uniquenessPercent"] for s in scores.values()]),
            "potentialDuplicateCount": len(potential_duplicates),
            "flaggedPageCount": sum(1 for p in pages if p.similar_pages),
            "suspiciousPairCount": sum(1 for r in result.similarities if r.is_suspicious),
            "highestSimilarityScore": max((r.similarity for r in result.similarities), default=0.0),
            "analysisDate": datetime.now(timezone.utc).isoformat(),
        }

        groups: dict[str, dict] = {}
        if self.mode is SitemapFilter.SERVICE_DETAILS:
            groups = {
                "categoryAnalysis": self.group_analysis(result, lambda f: f.category),
                "serviceAnalysis": self.group_analysis(result, lambda f: f.item),
                "locationAnalysis": self.group_analysis(result, lambda f: f.location),
            }

        report = {
            "summary": summary,
            "potentialDuplicates": potential_duplicates[:TOP_N],
            "leastUniquePages": least_unique,
            "mostSimilarPairs": pairs,
            **groups,
            "recommendations": [r.to_dict() for r in self.recommendations(summary, pairs, groups)],
            "pageAnalysis": page_entries,
        }
        logger.info(
            "Report built: %d pages, average uniqueness %.1f%%",
            len(pages), summary["averageUniquenessPercent"],
        )
        return report

    def detailed_results(self, result: ComparisonResult) -> dict:
        """Every page and every pair, for the detailed output file."""
        facets = {p.url: p.facets for p in result.page_analysis}
        return {
            "pages": [
                {
                    "url": p.url,
                    "title": p.title,
                    "metaDescription": p.meta_description,
                    "wordCount": p.word_count,
                    "uniquenessScore": p.uniqueness_score,
                    "facets": _facets_to_dict(p.facets),
                    "similarPages": [{"url": s.url, "similarity": s.similarity} for s in p.similar_pages],
                }
                for p in result.page_analysis
            ],
            "similarities": [self._pair_to_dict(r, facets) for r in result.similarities],
        }
