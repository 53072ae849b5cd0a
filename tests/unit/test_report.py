"""Tests for the uniqueness report builder."""

import pytest

from protech.audit.facets import SitemapFilter, parse_facets
from protech.audit.report import (
    DIFFERENT_LOCATIONS,
    DIFFERENT_SERVICES_DIFFERENT_LOCATIONS,
    DIFFERENT_SERVICES_SAME_LOCATION,
    SAME_LOCATION,
    SAME_SERVICE_DIFFERENT_LOCATIONS,
    SAME_SERVICE_SAME_LOCATION,
    UNCLASSIFIED,
    ReportBuilder,
    comparison_type,
    similarity_to_dict,
)
from protech.audit.similarity import compare_all
from protech.core.types import ComparisonResult, PageRecord, SimilarityRecord, SimilarPage, UrlFacets

BASE = "https://protech-ohio.com/services/heating/furnace/repairs"
A = f"{BASE}/igniter/akron-oh"
B = f"{BASE}/igniter/canton-oh"
C = f"{BASE}/thermostat/akron-oh"


def _pair(a: str, b: str, similarity: float, threshold: float = 0.8) -> SimilarityRecord:
    return SimilarityRecord(
        page_a=a,
        page_b=b,
        similarity=similarity,
        content_similarity=similarity,
        title_similarity=similarity,
        meta_similarity=similarity,
        is_suspicious=similarity > threshold,
    )


@pytest.fixture
def service_result() -> ComparisonResult:
    """Three service-detail pages; only the two igniter pages are suspicious."""
    pages = [
        PageRecord(url=u, content="x", word_count=150, title=u, facets=parse_facets(u, SitemapFilter.SERVICE_DETAILS))
        for u in (A, B, C)
    ]
    pages[0].similar_pages = [SimilarPage(B, 0.95)]
    pages[1].similar_pages = [SimilarPage(A, 0.95)]
    pages[0].uniqueness_score = pages[1].uniqueness_score = 1 - 1 / 3
    pages[2].uniqueness_score = 1.0
    return ComparisonResult(
        page_analysis=pages,
        similarities=[_pair(A, B, 0.95), _pair(A, C, 0.5), _pair(B, C, 0.3)],
    )


class TestComparisonType:
    @pytest.mark.parametrize(
        "a,b,expected",
        [
            (UrlFacets(item="igniter", location="akron-oh"), UrlFacets(item="igniter", location="akron-oh"), SAME_SERVICE_SAME_LOCATION),
            (UrlFacets(item="igniter", location="akron-oh"), UrlFacets(item="igniter", location="kent-oh"), SAME_SERVICE_DIFFERENT_LOCATIONS),
            (UrlFacets(item="igniter", location="akron-oh"), UrlFacets(item="blower", location="akron-oh"), DIFFERENT_SERVICES_SAME_LOCATION),
            (UrlFacets(item="igniter", location="akron-oh"), UrlFacets(item="blower", location="kent-oh"), DIFFERENT_SERVICES_DIFFERENT_LOCATIONS),
            (UrlFacets(location="akron-oh"), UrlFacets(location="akron-oh"), SAME_LOCATION),
            (UrlFacets(location="akron-oh"), UrlFacets(location="kent-oh"), DIFFERENT_LOCATIONS),
            (UrlFacets(), UrlFacets(), UNCLASSIFIED),
        ],
    )
    def test_labels(self, a, b, expected):
        assert comparison_type(a, b) == expected


def test_similarity_to_dict_keys():
    data = similarity_to_dict(_pair(A, B, 0.9))
    assert set(data) == {
        "pageA", "pageB", "similarity", "contentSimilarity", "titleSimilarity", "metaSimilarity", "isSuspicious",
    }
    assert data["isSuspicious"] is True


class TestBuildServiceDetails:
    def test_summary(self, service_result):
        report = ReportBuilder(threshold=0.8, mode=SitemapFilter.SERVICE_DETAILS).build(service_result, total_fetched=5)
        summary = report["summary"]
        assert summary["mode"] == "service-details"
        assert summary["totalPagesFetched"] == 5
        assert summary["totalPagesAnalyzed"] == 3
        assert summary["invalidPages"] == 2
        assert summary["totalComparisons"] == 3
        assert summary["suspiciousPairCount"] == 1
        assert summary["flaggedPageCount"] == 2
        assert summary["potentialDuplicateCount"] == 0
        assert summary["highestSimilarityScore"] == 0.95
        assert summary["averageUniquenessPercent"] == pytest.approx((27.5 + 37.5 + 60.0) / 3)
        assert summary["averageUniqueness"] == pytest.approx((2 / 3 + 2 / 3 + 1) / 3)

    def test_page_scores(self, service_result):
        scores = ReportBuilder().page_scores(service_result)
        assert scores[A]["uniquenessPercent"] == pytest.approx(27.5)
        assert scores[C]["uniquenessPercent"] == pytest.approx(60.0)
        assert scores[A]["suspiciousPartnerCount"] == 1
        assert scores[C]["suspiciousPartnerCount"] == 0

    def test_most_similar_pairs(self, service_result):
        pairs = ReportBuilder(mode=SitemapFilter.SERVICE_DETAILS).build(service_result)["mostSimilarPairs"]
        assert [p["similarity"] for p in pairs] == [0.95, 0.5, 0.3]
        assert pairs[0]["comparisonType"] == SAME_SERVICE_DIFFERENT_LOCATIONS
        assert pairs[1]["comparisonType"] == DIFFERENT_SERVICES_SAME_LOCATION
        assert not any(p["isCritical"] for p in pairs)

    def test_group_analysis(self, service_result):
        report = ReportBuilder(mode=SitemapFilter.SERVICE_DETAILS).build(service_result)
        assert report["categoryAnalysis"]["heating"]["comparisonCount"] == 3
        assert report["serviceAnalysis"]["igniter"]["comparisonCount"] == 3
        assert report["serviceAnalysis"]["thermostat"]["comparisonCount"] == 2
        assert report["locationAnalysis"]["akron-oh"]["comparisonCount"] == 3
        assert report["locationAnalysis"]["canton-oh"]["avgSimilarity"] == pytest.approx(0.625)

    def test_least_unique_first(self, service_result):
        report = ReportBuilder(mode=SitemapFilter.SERVICE_DETAILS).build(service_result)
        assert [p["url"] for p in report["leastUniquePages"]] == [A, B, C]
        assert report["pageAnalysis"][0]["facets"]["item"] == "igniter"

    def test_recommendations(self, service_result):
        report = ReportBuilder(mode=SitemapFilter.SERVICE_DETAILS).build(service_result)
        recs = report["recommendations"]
        assert recs[0]["severity"] == "critical"
        messages = " ".join(r["message"] for r in recs)
        assert "canton-oh" in messages
        assert "akron-oh" in messages
        assert "igniter" in messages


class TestBuildAllMode:
    def test_no_group_analysis_or_facets(self, service_result):
        report = ReportBuilder(mode=SitemapFilter.ALL).build(service_result)
        assert "serviceAnalysis" not in report
        assert "locationAnalysis" not in report
        assert "facets" not in report["pageAnalysis"][0]
        assert list(report)[:4] == ["summary", "potentialDuplicates", "leastUniquePages", "mostSimilarPairs"]

    def test_potential_duplicates(self):
        text = "identical furnace copy for every town " * 20
        pages = [PageRecord(url=f"https://x/{i}", content=text, word_count=140, title="T", meta_description="M") for i in range(4)]
        result = compare_all(pages, threshold=0.5)
        report = ReportBuilder(threshold=0.5).build(result)
        # each page is suspicious with three of four, uniqueness 0.25 < 1 - 0.5
        assert report["summary"]["potentialDuplicateCount"] == 4
        assert report["summary"]["averageUniquenessPercent"] == pytest.approx(0.0)

    def test_critical_pair_flagged(self):
        pages = [
            PageRecord(url=u, content="x", word_count=150, facets=UrlFacets(item="igniter", location="akron-oh"))
            for u in ("https://x/1", "https://x/2")
        ]
        result = ComparisonResult(page_analysis=pages, similarities=[_pair("https://x/1", "https://x/2", 0.97)])
        report = ReportBuilder().build(result)
        assert report["mostSimilarPairs"][0]["isCritical"]
        assert any("nearly identical" in r["message"] for r in report["recommendations"])

    def test_good_uniqueness(self):
        pages = [PageRecord(url=u, content="x", word_count=150, uniqueness_score=1.0) for u in ("https://x/1", "https://x/2")]
        result = ComparisonResult(page_analysis=pages, similarities=[_pair("https://x/1", "https://x/2", 0.1)])
        recs = ReportBuilder().build(result)["recommendations"]
        assert [r["severity"] for r in recs] == ["ok"]

    def test_top_pairs_capped(self):
        urls = [f"https://x/{i}" for i in range(6)]
        pages = [PageRecord(url=u, content="x", word_count=150) for u in urls]
        sims = [_pair(a, b, 0.01 * n) for n, (a, b) in enumerate((a, b) for i, a in enumerate(urls) for b in urls[i + 1:])]
        report = ReportBuilder().build(ComparisonResult(page_analysis=pages, similarities=sims))
        assert len(report["mostSimilarPairs"]) == 10
        assert report["mostSimilarPairs"][0]["similarity"] == pytest.approx(0.14)


def test_detailed_results(service_result):
    detailed = ReportBuilder().detailed_results(service_result)
    assert len(detailed["pages"]) == 3
    assert len(detailed["similarities"]) == 3
    assert detailed["pages"][0]["facets"]["location"] == "akron-oh"
    assert detailed["similarities"][0]["comparisonType"] == SAME_SERVICE_DIFFERENT_LOCATIONS
