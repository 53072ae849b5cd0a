"""Tests for the protech-audit and protech-locate commands."""

import logging
from unittest.mock import AsyncMock, patch

import pytest

from protech.audit.facets import SitemapFilter
from protech.audit.runner import AuditOutcome
from protech.cli import _colored, _parse_coordinates, audit_main, build_audit_parser, locate_main, print_summary
from protech.core.types import Coordinates
from protech.observability.logging import LEVEL_COLORS, RESET

REPORT = {
    "summary": {
        "totalPagesFetched": 3,
        "totalPagesAnalyzed": 2,
        "averageUniquenessPercent": 42.5,
        "potentialDuplicateCount": 1,
        "highestSimilarityScore": 0.93,
    },
    "potentialDuplicates": [{"url": "https://x/a", "uniquenessScore": 0.0}],
    "mostSimilarPairs": [
        {
            "pageA": "https://x/a",
            "pageB": "https://x/b",
            "similarity": 0.93,
            "isSuspicious": True,
            "comparisonType": "Different locations",
        }
    ],
    "recommendations": [{"severity": "critical", "message": "Overall uniqueness is very low."}],
}


class TestAuditParser:
    def test_defaults(self):
        args = build_audit_parser().parse_args([])
        assert not args.detailed
        assert args.sample is None
        assert not args.locations and not args.service_details

    def test_flags(self):
        args = build_audit_parser().parse_args(["--detailed", "--sample", "20", "--service-details"])
        assert args.detailed
        assert args.sample == 20
        assert args.service_details

    def test_conflicting_scope_flags_exit_before_network(self):
        with patch("protech.audit.runner.httpx.AsyncClient") as client:
            with pytest.raises(SystemExit) as exc:
                audit_main(["--locations", "--service-details"])
        assert exc.value.code == 2
        client.assert_not_called()


class TestAuditMain:
    def test_failure_exit_code(self):
        with patch("protech.audit.runner.run_audit", new_callable=AsyncMock, return_value=AuditOutcome(exit_code=1)):
            with pytest.raises(SystemExit) as exc:
                audit_main([])
        assert exc.value.code == 1

    def test_success_prints_summary(self, tmp_path, capsys):
        outcome = AuditOutcome(exit_code=0, report=REPORT, report_path=tmp_path / "r.json")
        with patch("protech.audit.runner.run_audit", new_callable=AsyncMock, return_value=outcome) as run:
            audit_main(["--locations", "--sample", "5", "--output-dir", str(tmp_path)])

        options = run.await_args.args[0]
        assert options.mode is SitemapFilter.LOCATIONS
        assert options.sample == 5
        assert options.output_dir == str(tmp_path)

        out = capsys.readouterr().out
        assert "Average uniqueness:     42.50%" in out
        assert "https://x/b" in out
        assert "Overall uniqueness is very low." in out
        assert f"Report saved to: {tmp_path / 'r.json'}" in out


def test_print_summary_group_sections(capsys):
    report = {**REPORT, "locationAnalysis": {"akron-oh": {"uniquenessScore": 35.0}}}
    print_summary(report)
    out = capsys.readouterr().out
    assert "LOCATION UNIQUENESS:" in out
    assert "akron-oh: 35.00%" in out


class TestParseCoordinates:
    def test_valid(self):
        assert _parse_coordinates("41.08, -81.52") == Coordinates(41.08, -81.52)

    @pytest.mark.parametrize("text", ["Akron, OH", "44301", "north,south"])
    def test_not_coordinates(self, text):
        assert _parse_coordinates(text) is None


class TestLocateMain:
    def test_no_args(self, capsys):
        with pytest.raises(SystemExit) as exc:
            locate_main([])
        assert exc.value.code == 1
        assert "Usage" in capsys.readouterr().out

    def test_zip(self, capsys):
        locate_main(["44301"])
        out = capsys.readouterr().out
        assert "Location:  Akron, OH (akron-oh)" in out
        assert "Gate:      render -> akron-oh" in out
        assert "Zip:       44301 (in service area)" in out

    def test_zip_near_service_area(self, capsys):
        locate_main(["44999"])
        assert "Zip:       44999 (near service area)" in capsys.readouterr().out

    def test_zip_outside_service_area(self, capsys):
        locate_main(["10001"])
        assert "Zip:       10001 (outside service area)" in capsys.readouterr().out

    def test_city(self, capsys):
        locate_main(["Cuyahoga", "Falls,", "OH"])
        out = capsys.readouterr().out
        assert "(cuyahoga-falls-oh)" in out
        assert "Zip:" not in out

    def test_coordinates(self, capsys):
        locate_main(["41.4993,-81.6944"])
        assert "(cleveland-oh)" in capsys.readouterr().out


class TestColored:
    def test_plain_when_not_a_tty(self):
        with patch("protech.cli.sys") as fake_sys:
            fake_sys.stdout.isatty.return_value = False
            assert _colored("low", "critical") == "low"

    @pytest.mark.parametrize(
        "severity, level",
        [("critical", logging.ERROR), ("warning", logging.WARNING), ("ok", logging.INFO)],
    )
    def test_uses_log_level_colours(self, severity, level):
        with patch("protech.cli.sys") as fake_sys:
            fake_sys.stdout.isatty.return_value = True
            assert _colored("text", severity) == f"{LEVEL_COLORS[level]}text{RESET}"

    def test_unknown_severity_uncoloured(self):
        with patch("protech.cli.sys") as fake_sys:
            fake_sys.stdout.isatty.return_value = True
            assert _colored("text", "info") == "text"
