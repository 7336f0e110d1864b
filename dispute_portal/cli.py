"""Command line entry point: run the endpoint, export disputes, print metrics."""
import argparse
import json
import logging
import sys
from pathlib import Path

from dispute_portal.core.config import load_settings
from dispute_portal.core.errors import PortalError
from dispute_portal.core.logging import configure_logging
from dispute_portal.core.utils import utc_now
from dispute_portal.processing.aging import age_buckets
from dispute_portal.processing.filters import filter_disputes, normalize_filters
from dispute_portal.processing.metrics import calculate_metrics, resolution_rate, status_tally
from dispute_portal.reporting.sinks import write_csv, write_excel
from dispute_portal.reporting.templates import disputes_to_export_rows, export_filename
from dispute_portal.repository import build_repository

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one sub-command per surface."""

    parser = argparse.ArgumentParser(description="Supplier return dispute portal")
    commands = parser.add_subparsers(dest="command", required=True)

    serve = commands.add_parser("serve", help="Run the HTTP endpoint")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    export = commands.add_parser("export", help="Export filtered disputes to CSV or Excel")
    export.add_argument(
        "--output",
        type=Path,
        help="Destination file (defaults to output/disputes_export_<date>.xlsx or .csv)",
    )
    export.add_argument("--format", choices=["excel", "csv"], default="excel")
    export.add_argument("--owner", help="Only disputes of this supplier id or email")
    export.add_argument("--search", default="", help="Free-text search term")
    export.add_argument("--status", default="all")
    export.add_argument("--priority", default="all")
    export.add_argument("--type", dest="dispute_type", default="all")
    export.add_argument("--city", default="all")

    metrics = commands.add_parser("metrics", help="Print the status tally and pending age buckets as JSON")
    metrics.add_argument("--owner", help="Only disputes of this supplier id or email")
    return parser


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    from dispute_portal.server.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


def _export(args: argparse.Namespace) -> Path:
    now = utc_now()
    repository = build_repository(load_settings())
    filters = normalize_filters(vars(args))
    disputes = filter_disputes(repository.list(owner=args.owner), filters)
    rows = disputes_to_export_rows(disputes, now)

    output = args.output or Path("output") / export_filename(now)
    if args.format == "csv":
        output = output.with_suffix(".csv")
        write_csv(rows, output)
    else:
        write_excel(rows, output)
    logger.info("Exported %d disputes to %s", len(rows), output)
    return output


def _metrics(args: argparse.Namespace) -> dict:
    repository = build_repository(load_settings())
    disputes = repository.list(owner=args.owner)
    metrics = calculate_metrics(disputes)
    return {
        "metrics": metrics.to_dict(),
        "tally": status_tally(disputes),
        "resolution_rate": resolution_rate(metrics),
        "pending_age": age_buckets(disputes, utc_now()),
    }


def main(argv: list[str] | None = None) -> None:
    """Entrypoint for the ``dispute-portal`` command."""

    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        if args.command == "serve":
            _serve(args)
        elif args.command == "export":
            print(f"Wrote {_export(args)}")
        else:
            print(json.dumps(_metrics(args), indent=2))
    except PortalError as exc:
        logger.error("%s failed: %s", args.command, exc.message)
        print(f"Error: {exc.message}", file=sys.stderr)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
