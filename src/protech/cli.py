"""ProTech CLI — content uniqueness audit and location lookup commands."""

import argparse
import asyncio
import logging
import sys

from protech.config import settings
from protech.core.types import Coordinates
from protech.observability.logging import colorize, setup_logging

logger = logging.getLogger(__name__)

# Report severities shown in the level colours the log output uses
SEVERITY_LEVELS = {"critical": logging.ERROR, "warning": logging.WARNING, "ok": logging.INFO}


def _colored(text: str, severity: str) -> str:
    if not sys.stdout.isatty():
        return text
    return colorize(text, SEVERITY_LEVELS.get(severity, logging.NOTSET))


def _parse_coordinates(text: str) -> Coordinates | None:
    """Parse "41.08, -81.52" into Coordinates; None for anything else."""
    lat, sep, lng = text.partition(",")
    if not sep:
        return None
    try:
        return Coordinates(float(lat), float(lng))
    except ValueError:
        return None


def build_audit_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protech-audit",
        description="Check site pages for duplicate or near-duplicate content.",
    )
    parser.add_argument("--detailed", action="store_true", help="Also write the per-pair detailed report")
    parser.add_argument("--sample", type=int, default=None, metavar="N", help="Audit a random sample of N pages")
    scope = parser.add_mutually_exclusive_group()
    scope.add_argument("--locations", action="store_true", help="Only audit /locations/ pages")
    scope.add_argument("--service-details", action="store_true", help="Only audit service-detail pages")
    parser.add_argument("--sitemap-url", default=settings.sitemap_url, help="Sitemap to read")
    parser.add_argument("--output-dir", default=settings.audit_output_dir, help="Where to write reports")
    parser.add_argument(
        "--threshold", type=float, default=settings.audit_similarity_threshold,
        help="Similarity above which a pair is suspicious",
    )
    return parser


def print_summary(report: dict) -> None:
    summary = report["summary"]
    print("\nRESULTS SUMMARY:")
    print(f"  Pages fetched:          {summary['totalPagesFetched']}")
    print(f"  Pages analyzed:         {summary['totalPagesAnalyzed']}")
    print(f"  Average uniqueness:     {summary['averageUniquenessPercent']:.2f}%")
    print(f"  Potential duplicates:   {summary['potentialDuplicateCount']}")
    print(f"  Highest similarity:     {summary['highestSimilarityScore'] * 100:.2f}%")

    if report["potentialDuplicates"]:
        print("\nPOTENTIAL DUPLICATE PAGES:")
        for i, page in enumerate(report["potentialDuplicates"], 1):
            print(_colored(f"  {i}. {page['url']} (uniqueness {page['uniquenessScore'] * 100:.2f}%)", "critical"))

    if report["mostSimilarPairs"]:
        print("\nMOST SIMILAR PAGE PAIRS:")
        for i, pair in enumerate(report["mostSimilarPairs"], 1):
            severity = "critical" if pair["isSuspicious"] else "ok"
            print(_colored(f"  {i}. Similarity: {pair['similarity'] * 100:.2f}% ({pair['comparisonType']})", severity))
            print(f"     - {pair['pageA']}")
            print(f"     - {pair['pageB']}")

    for key, title in (("locationAnalysis", "LOCATION"), ("serviceAnalysis", "SERVICE")):
        if report.get(key):
            print(f"\n{title} UNIQUENESS:")
            for name, data in sorted(report[key].items(), key=lambda kv: kv[1]["uniquenessScore"]):
                print(f"  {name}: {data['uniquenessScore']:.2f}%")

    print("\nRECOMMENDATIONS:")
    for rec in report["recommendations"]:
        print(_colored(f"  • {rec['message']}", rec["severity"]))


def audit_main(argv: list[str] | None = None) -> None:
    """Run the uniqueness audit: protech-audit [--detailed] [--sample N] [--locations | --service-details]"""
    args = build_audit_parser().parse_args(argv)
    setup_logging(json_format=False, level=settings.log_level, color=sys.stderr.isatty())

    from protech.audit.facets import filter_mode_from_flags
    from protech.audit.runner import AuditOptions, run_audit

    options = AuditOptions(
        sitemap_url=args.sitemap_url,
        mode=filter_mode_from_flags(args.locations, args.service_details),
        sample=args.sample,
        detailed=args.detailed,
        output_dir=args.output_dir,
        threshold=args.threshold,
        show_progress=sys.stderr.isatty(),
    )
    print("ProTech content uniqueness audit")
    print(f"  Sitemap: {options.sitemap_url}  Mode: {options.mode.value}")

    outcome = asyncio.run(run_audit(options))
    if outcome.exit_code != 0:
        sys.exit(outcome.exit_code)

    print_summary(outcome.report)
    print(f"\nReport saved to: {outcome.report_path}")
    if outcome.detailed_path:
        print(f"Detailed report saved to: {outcome.detailed_path}")


def locate_main(argv: list[str] | None = None) -> None:
    """Resolve a location hint: protech-locate <zip | "City, ST" | slug | lat,lng>"""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Usage: protech-locate <zip | \"City, ST\" | slug | lat,lng>")
        print('  Example: protech-locate "Cuyahoga Falls, OH"')
        sys.exit(1)

    from protech.locations.gate import evaluate
    from protech.locations.local_data import get_location_specific_data
    from protech.locations.matcher import resolve
    from protech.locations.zipcodes import zip_coverage

    text = " ".join(args)
    location = resolve(_parse_coordinates(text) or text)
    gate = evaluate(location.id)
    data = get_location_specific_data(location.id)
    print(f"Hint:      {text}")
    coverage = zip_coverage(text)
    if coverage is not None:
        in_area, near_area = coverage
        status = "in service area" if in_area else "near service area" if near_area else "outside service area"
        print(f"Zip:       {text.strip()} ({status})")
    print(f"Location:  {location.label} ({location.id})")
    print(f"County:    {location.county or data.county}")
    print(f"Coords:    {location.coordinates.lat:.4f}, {location.coordinates.lng:.4f}")
    print(f"Local data: {data.location_id}")
    print(f"Gate:      {gate.decision.value} -> {gate.canonical_slug}")


if __name__ == "__main__":
    audit_main()
