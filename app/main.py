import argparse
import json
import sys
from collections.abc import Sequence
from dataclasses import asdict
from datetime import date

from app.analysis.history import summarize_history
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.job_repository import JobRepository
from app.database.repositories.symptom_analyses_repository import SymptomAnalysesRepository
from app.facilities.exceptions import FacilitySearchError
from app.facilities.finder import FILTER_TYPES, build_facility_finder, filter_facilities
from app.facilities.models import Coordinates
from app.logging.logger import Log
from app.processor.processor import build_processor
from app.worker.job_runner import JobRunner
from app.worker.worker import Worker


def run_worker(settings: Settings, _args: argparse.Namespace) -> None:
    """Open the pool and run the analysis worker until interrupted."""
    Log.info(
        f"Starting symptom analysis worker "
        f"(env={settings.app_env}, provider={settings.analysis_provider})"
    )
    init_pool(settings)
    processor = None

    try:
        job_repo = JobRepository(settings.max_job_attempts)
        processor = build_processor(settings)
        runner = JobRunner(processor, job_repo, settings)
        Worker(job_repo, runner, settings).run()
    finally:
        if processor is not None:
            processor.close()
        close_pool()


def show_summary(settings: Settings, args: argparse.Namespace) -> None:
    """Print the dashboard health summary for one user as JSON."""
    init_pool(settings)
    try:
        analyses = SymptomAnalysesRepository().list_for_user(args.user_id)
    finally:
        close_pool()

    summary = summarize_history(analyses, date.today())
    Log.info(
        f"Summarized {len(analyses)} analyses for user {args.user_id}",
        health_score=summary.health_score,
    )
    print(json.dumps(asdict(summary), indent=2))


def find_facilities(settings: Settings, args: argparse.Namespace) -> None:
    """Print nearby healthcare facilities as JSON, filtered like the facilities page."""
    finder = build_facility_finder(settings)
    try:
        facilities = finder.find_nearby(Coordinates(args.latitude, args.longitude))
    except FacilitySearchError as exc:
        Log.error(f"Facility search failed: {exc}")
        sys.exit(1)
    finally:
        finder.close()

    matches = filter_facilities(facilities, args.search, args.filter)
    print(json.dumps([asdict(facility) for facility in matches], indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symptom-analysis-worker",
        description="Symptom analysis worker and its dashboard helpers.",
    )
    parser.set_defaults(handler=run_worker)
    commands = parser.add_subparsers(dest="command")

    worker = commands.add_parser("worker", help="poll and process analysis jobs (default)")
    worker.set_defaults(handler=run_worker)

    summary = commands.add_parser("summary", help="health summary over a user's analyses")
    summary.add_argument("user_id")
    summary.set_defaults(handler=show_summary)

    facilities = commands.add_parser("facilities", help="search nearby healthcare facilities")
    facilities.add_argument("latitude", type=float)
    facilities.add_argument("longitude", type=float)
    facilities.add_argument("--search", default="", help="match name, address or specialty")
    facilities.add_argument("--filter", default="all", choices=FILTER_TYPES)
    facilities.set_defaults(handler=find_facilities)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Load settings and run the requested command (the worker by default)."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    args.handler(settings, args)


if __name__ == "__main__":
    main()
