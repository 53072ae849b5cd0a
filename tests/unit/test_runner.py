"""Tests for the end-to-end audit run."""

import json

import httpx

from protech.audit.facets import SitemapFilter
from protech.audit.runner import AuditOptions, run_audit, write_json
from protech.config import settings

BASE = "https://protech-ohio.com"

COPY = {
    "/services/locations/akron-oh": "Akron homes built before 1960 often need duct sealing and boiler service " * 12,
    "/services/locations/canton-oh": "Akron homes built before 1960 often need duct sealing and boiler service " * 12,
    "/services/locations/kent-oh": "Kent student rentals rely on heat pumps and ductless mini split systems now " * 12,
    "/services/locations/lodi-oh": "Too short",
}


def make_html(body: str, title: str = "Page", description: str = "") -> str:
    return (
        f'<html><head><title>{title}</title><meta name="description" content="{description}"></head>'
        f"<body><main>{body}</main></body></html>"
    )


def _sitemap(paths) -> str:
    entries = "".join(f"<url><loc>{BASE}{p}</loc></url>" for p in paths)
    return f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{entries}</urlset>'


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/sitemap.xml":
        return httpx.Response(200, text=_sitemap([*COPY, "/blog/news"]))
    body = COPY.get(request.url.path)
    if body is None:
        return httpx.Response(404)
    return httpx.Response(200, text=make_html(f"<p>{body}</p>", title="Heating and Cooling", description="Local HVAC"))


def _options(tmp_path, **kwargs) -> AuditOptions:
    return AuditOptions(sitemap_url=f"{BASE}/sitemap.xml", output_dir=str(tmp_path), **kwargs)


def test_write_json_creates_directory(tmp_path):
    path = write_json(tmp_path / "nested" / "out.json", {"a": 1})
    assert json.loads(path.read_text()) == {"a": 1}


class TestRunAudit:
    async def test_writes_report(self, tmp_path):
        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            outcome = await run_audit(_options(tmp_path, mode=SitemapFilter.LOCATIONS), client)

        assert outcome.exit_code == 0
        assert outcome.report_path == tmp_path / settings.audit_output_file
        assert outcome.detailed_path is None

        report = json.loads(outcome.report_path.read_text())
        summary = report["summary"]
        assert summary["totalPagesFetched"] == 4
        assert summary["totalPagesAnalyzed"] == 3
        assert summary["invalidPages"] == 1
        assert summary["totalComparisons"] == 3
        assert summary["suspiciousPairCount"] == 1

        top = report["mostSimilarPairs"][0]
        assert {top["pageA"], top["pageB"]} == {
            f"{BASE}/services/locations/akron-oh",
            f"{BASE}/services/locations/canton-oh",
        }
        assert top["comparisonType"] == "Different locations"

    async def test_detailed_output(self, tmp_path):
        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            outcome = await run_audit(_options(tmp_path, detailed=True), client)

        assert outcome.exit_code == 0
        detailed = json.loads(outcome.detailed_path.read_text())
        assert len(detailed["pages"]) == 3
        assert len(detailed["similarities"]) == 3

    async def test_empty_sitemap(self, tmp_path):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=_sitemap([])))
        async with httpx.AsyncClient(transport=transport) as client:
            outcome = await run_audit(_options(tmp_path), client)
        assert outcome.exit_code == 1
        assert outcome.report is None
        assert not (tmp_path / settings.audit_output_file).exists()

    async def test_no_valid_pages(self, tmp_path):
        def handler(request):
            if request.url.path == "/sitemap.xml":
                return httpx.Response(200, text=_sitemap(["/services/locations/lodi-oh"]))
            return httpx.Response(200, text=make_html("<p>Too short</p>"))

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            outcome = await run_audit(_options(tmp_path), client)
        assert outcome.exit_code == 1

    async def test_unreachable_sitemap(self, tmp_path):
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(500))) as client:
            outcome = await run_audit(_options(tmp_path), client)
        assert outcome.exit_code == 1
